"""Coaching Service: AI narrative commentary on trading behavior.

Builds prompts from journal data, sends them to a NarrativeClient and
returns the text verbatim (coach replies are cleaned of markdown).

Client failures never propagate: they are logged and replaced by a
short localized message, and nothing is written to the trade store.
"""

import logging
from typing import Sequence

from trade_journal.domain.models import Trade
from trade_journal.domain.prompts import (
    CoachMode,
    Language,
    build_coach_prompt,
    build_log_prompt,
    build_trade_prompt,
    clean_coach_reply,
)
from trade_journal.infrastructure.ai_client import (
    GeminiNarrativeClient,
    NarrativeClient,
    NarrativeClientError,
)
from trade_journal.application.services.journal import JournalService

logger = logging.getLogger(__name__)

FALLBACK_MESSAGES = {
    "log": {
        "en": "Error analyzing trade log.",
        "ar": "حدث خطأ أثناء تحليل السجل.",
    },
    "trade": {
        "en": "Could not analyze trade at this time.",
        "ar": "تعذر تحليل الصفقة حالياً.",
    },
    "coach": {
        "en": "Sorry, line broke up. Can you say that again?",
        "ar": "آسف، انقطع الخط لحظة. هل يمكنك الإعادة؟",
    },
}


def fallback_message(kind: str, lang: str) -> str:
    """Localized message shown when the narrative client fails."""
    messages = FALLBACK_MESSAGES[kind]
    return messages.get(lang, messages["en"])


class CoachingService:
    """Service for AI coaching commentary.

    Example:
        >>> coach = CoachingService()
        >>> text = coach.analyze_log(journal.snapshot().trades, lang="en")
    """

    def __init__(self, client: NarrativeClient | None = None):
        """Initialize the service.

        Args:
            client: Narrative backend (Gemini if not provided)
        """
        self._client = client or GeminiNarrativeClient()

    def _generate(self, prompt: str, kind: str) -> str | None:
        try:
            return self._client.generate(prompt)
        except NarrativeClientError as e:
            logger.error("Narrative generation failed (%s): %s", kind, e)
            return None

    def analyze_log(self, trades: Sequence[Trade], lang: Language = "en") -> str:
        """Strengths, recurring mistakes and tips for a set of trades.

        Returns:
            Narrative text ("" for no trades)
        """
        if not trades:
            return ""
        text = self._generate(build_log_prompt(trades, lang), "log")
        return fallback_message("log", lang) if text is None else text

    def analyze_trade(self, trade: Trade, lang: Language = "en") -> str:
        """Coach review of a single trade."""
        text = self._generate(build_trade_prompt(trade, lang), "trade")
        return fallback_message("trade", lang) if text is None else text

    def annotate_trade(
        self,
        journal: JournalService,
        trade_id: str,
        lang: Language = "en",
    ) -> str:
        """Analyze a stored trade and cache the narrative on it.

        The narrative is only stored when generation succeeds.

        Raises:
            TradeNotFoundError: If no trade has this id
        """
        trade = journal.get_trade(trade_id)
        text = self._generate(build_trade_prompt(trade, lang), "trade")
        if text is None:
            return fallback_message("trade", lang)
        journal.attach_analysis(trade_id, text)
        return text

    def coach_reply(
        self,
        history: Sequence[tuple[str, str]],
        user_text: str,
        lang: Language = "en",
        trades: Sequence[Trade] = (),
        current_trade: Trade | None = None,
        mode: CoachMode = "general",
    ) -> str:
        """Next reply in a coaching conversation.

        Args:
            history: Prior (role, text) turns, role "user" or "coach"
            user_text: The trader's new message
            lang: Reply language
            trades: Trades for the trader profile
            current_trade: Trade under discussion, if any
            mode: general, economic or technical focus
        """
        prompt = build_coach_prompt(history, user_text, lang, trades, current_trade, mode)
        text = self._generate(prompt, "coach")
        if text is None:
            return fallback_message("coach", lang)
        return clean_coach_reply(text)
