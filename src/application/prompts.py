"""
Prompt template for the recommendation model.
Keeping the prompt in the application layer keeps it next to the parsing
rules in the recommendation extractor, which depend on its labels.
"""

from typing import Optional

RECOMMENDATION_PROMPT = """
You are a professional financial analyst.

### Stock Overview:
- **Stock Symbol:** {symbol}
- **Current Price:** ${price}
- **Market Sentiment:** {sentiment}

### Latest Financial News:
"{news_text}"
{question_block}
### Investment Recommendation:
Based on the stock's performance, latest trends, and market sentiment, provide a **clear** investment recommendation (Buy, Sell, or Hold) along with a brief explanation.

Answer in exactly this format:
**Recommendation:** <Buy|Sell|Hold>
**Explanation:** <one short paragraph>
"""

QUESTION_BLOCK = """
### Investor Question:
{question}
"""


def build_recommendation_prompt(
    symbol: str,
    price: float,
    sentiment: str,
    news_text: str,
    question: Optional[str] = None,
) -> str:
    question_block = QUESTION_BLOCK.format(question=question.strip()) if question and question.strip() else ""
    return RECOMMENDATION_PROMPT.format(
        symbol=symbol,
        price=f"{price:.2f}",
        sentiment=sentiment,
        news_text=news_text,
        question_block=question_block,
    )
