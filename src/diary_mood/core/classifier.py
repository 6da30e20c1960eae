# src/diary_mood/core/classifier.py
import json
import logging

from openai import OpenAI

from .models import SentimentResult

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """
You read short personal diary entries and judge how the writer feels.
Return a JSON object with exactly these keys and nothing else:

- "sentiment": one of "positive", "negative", "neutral"
- "confidence": a float between 0.0 and 1.0
- "mood": one of "happy", "sad", "energetic", "calm", "anxious", "excited",
  "melancholy", "peaceful", "angry", "content"
- "explanation": one short sentence justifying the labels
"""


class SentimentClassifier:
    """
    Classifies diary text into a sentiment and a mood with an OpenAI chat model.

    The client is passed in rather than built here so tests can hand in a fake.
    """

    def __init__(self, client: OpenAI, model: str, temperature: float = 0.3):
        self.client = client
        self.model = model
        self.temperature = temperature

    def analyze(self, text: str) -> SentimentResult:
        """
        Returns the sentiment, confidence, mood and explanation for `text`.

        Never raises: any API, parsing or validation failure yields
        `SentimentResult.neutral()`.
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": text},
                ],
                response_format={"type": "json_object"},
                temperature=self.temperature,
            )
            payload = json.loads(response.choices[0].message.content or "{}")
            return SentimentResult.model_validate(payload)
        except Exception as e:
            logger.warning(f"Sentiment analysis failed, using neutral default: {e}")
            return SentimentResult.neutral()
