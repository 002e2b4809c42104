"""Coaching Prompts: Pure prompt builders for the AI narrative client.

Each builder takes trades (or a single trade) plus a language code
("en" or "ar") and returns the prompt text. No I/O happens here; the
coaching service sends the prompt and stores the reply verbatim.
"""

import re
from typing import Literal, Sequence

from trade_journal.domain.models import Trade
from trade_journal.domain.metrics.profile import analyze_trader_profile

Language = Literal["en", "ar"]
CoachMode = Literal["general", "economic", "technical"]

COACH_MODES: tuple[str, ...] = ("general", "economic", "technical")
HISTORY_TURNS = 4

_MARKDOWN_CHARS = re.compile(r"[*#_`]")
_ROLE_LABELS = re.compile(r"User:|Coach:")


# =============================================================================
# Trade Log Analysis
# =============================================================================

def format_trade_line(trade: Trade) -> str:
    """One history line: date, symbol, direction, PNL and strategy."""
    return (
        f"{trade.date}: {trade.symbol} ({trade.type.value}) - "
        f"PnL: {trade.pnl:g}, Strategy: {trade.strategy or 'N/A'}"
    )


def build_log_prompt(trades: Sequence[Trade], lang: Language = "en") -> str:
    """Prompt asking for strengths, recurring mistakes and tips."""
    history = "\n".join(format_trade_line(t) for t in trades)
    if lang == "ar":
        return (
            f"أنت محلل تداول خبير. قم بتحليل سجل التداول التالي:\n{history}\n\n"
            "المطلوب:\n"
            "1. تحديد نقاط القوة والضعف.\n"
            "2. تحديد الأخطاء المتكررة.\n"
            "3. تقديم نصائح عملية للتحسين.\n"
            "اجعل الرد منسقاً ومختصراً."
        )
    return (
        f"You are an expert trading analyst. Analyze the following trade log:\n{history}\n\n"
        "Requirements:\n"
        "1. Identify strengths and weaknesses.\n"
        "2. Identify recurring mistakes.\n"
        "3. Provide actionable tips for improvement.\n"
        "Keep the response structured and concise."
    )


# =============================================================================
# Single Trade Analysis
# =============================================================================

def _fmt_optional(value: float | None) -> str:
    return "N/A" if value is None else f"{value:g}"


def build_trade_prompt(trade: Trade, lang: Language = "en") -> str:
    """Prompt asking a coach to review one trade."""
    if lang == "ar":
        time_info = f"وقت الصفقة: {trade.time}" if trade.time else "وقت الصفقة: غير محدد"
        return (
            "أنت مدرب تداول محترف. حلل هذه الصفقة:\n"
            f"الرمز: {trade.symbol}\n"
            f"النوع: {trade.type.value}\n"
            f"الدخول: {_fmt_optional(trade.entry)}\n"
            f"الخروج: {_fmt_optional(trade.exit)}\n"
            f"وقف الخسارة: {_fmt_optional(trade.stop_loss)}\n"
            f"الهدف: {_fmt_optional(trade.take_profit)}\n"
            f"الربح/الخسارة: {trade.pnl:g}\n"
            f"{time_info}\n"
            f"سبب الدخول: {trade.entry_reason or 'غير محدد'}\n"
            f"المشاعر: {trade.emotions or 'غير محدد'}\n\n"
            "المطلوب:\n"
            "1. هل كان الدخول منطقياً؟\n"
            "2. تقييم إدارة المخاطر.\n"
            "3. نصيحة واحدة للتحسين.\n"
            "4. تشجيع قصير إذا كانت رابحة."
        )
    time_info = f"Trade Time: {trade.time}" if trade.time else "Trade Time: Not specified"
    return (
        "You are a professional trading coach. Analyze this trade:\n"
        f"Symbol: {trade.symbol}\n"
        f"Type: {trade.type.value}\n"
        f"Entry: {_fmt_optional(trade.entry)}\n"
        f"Exit: {_fmt_optional(trade.exit)}\n"
        f"Stop Loss: {_fmt_optional(trade.stop_loss)}\n"
        f"Take Profit: {_fmt_optional(trade.take_profit)}\n"
        f"PnL: {trade.pnl:g}\n"
        f"{time_info}\n"
        f"Entry Reason: {trade.entry_reason or 'Not specified'}\n"
        f"Emotions: {trade.emotions or 'Not specified'}\n\n"
        "Requirements:\n"
        "1. Was the entry logical?\n"
        "2. Risk management assessment.\n"
        "3. One actionable tip.\n"
        "4. Short encouragement if profitable."
    )


# =============================================================================
# Conversational Coach
# =============================================================================

def _coach_persona(profile_summary: str, mode: str, lang: Language) -> str:
    if lang == "ar":
        base = (
            'أنت مدرب تداول يتحدث مع المتداول. اسمك "الكوتش".\n'
            "- أسلوبك: جمل قصيرة وطبيعية ومباشرة. لا تستخدم قوائم أو تنسيق Markdown.\n"
            f"- السياق: {profile_summary}\n"
            "- هدفك: إدارة حوار مستمر. اختم ردك دائماً بسؤال قصير."
        )
        focus = {
            "economic": "- تركيزك: الأخبار الاقتصادية فقط (الفائدة، التضخم، التقارير). تجاهل التحليل الفني.",
            "technical": "- تركيزك: الرسوم البيانية والمؤشرات (RSI, MACD, الدعم والمقاومة). لا تتحدث عن الأخبار.",
        }.get(mode, "- أنت مدرب شامل. شجع المتداول واسأله عن نفسيته والتزامه بالخطة.")
    else:
        base = (
            'You are a trading coach talking with a trader. Name: "Coach".\n'
            "- Style: Very short, natural, punchy sentences. Do not use lists or Markdown.\n"
            f"- Context: {profile_summary}\n"
            "- Goal: Keep the conversation going. Always end with a short follow-up question."
        )
        focus = {
            "economic": "- Focus: Economic news only (rates, inflation, NFP). Ignore charts.",
            "technical": "- Focus: Charts and indicators (RSI, MACD, trends). Ignore news.",
        }.get(mode, "- Focus: General coaching, psychology, and discipline.")
    return f"{base}\n{focus}"


def build_coach_prompt(
    history: Sequence[tuple[str, str]],
    user_text: str,
    lang: Language = "en",
    trades: Sequence[Trade] = (),
    current_trade: Trade | None = None,
    mode: CoachMode = "general",
) -> str:
    """Conversation prompt for the coach.

    Args:
        history: (role, text) turns; role is "user" or "coach". Only the
            last four turns are sent.
        user_text: The trader's new message
        lang: Reply language
        trades: Trades used to build the trader profile
        current_trade: Trade under discussion, if any
        mode: general, economic or technical focus

    Raises:
        ValueError: If mode is unknown
    """
    if mode not in COACH_MODES:
        raise ValueError(f"mode must be one of {COACH_MODES}, got: {mode}")

    profile = analyze_trader_profile(trades)
    persona = _coach_persona(profile.summary(lang), mode, lang)

    context = ""
    if current_trade is not None:
        if lang == "ar":
            context = (
                f"نحن نناقش صفقة محددة الآن: {current_trade.symbol} "
                f"({current_trade.type.value})، النتيجة: {current_trade.pnl:g}$."
            )
        else:
            context = (
                f"We are discussing a specific trade: {current_trade.symbol} "
                f"({current_trade.type.value}), PnL: {current_trade.pnl:g}$."
            )

    recent = "\n".join(
        f"{'User' if role == 'user' else 'Coach'}: {text}"
        for role, text in list(history)[-HISTORY_TURNS:]
    )

    return f"{persona}\n\n{context}\n\nConversation:\n{recent}\nUser: {user_text}\nCoach:"


def clean_coach_reply(text: str) -> str:
    """Strip markdown characters and role labels from a coach reply."""
    text = _MARKDOWN_CHARS.sub("", text)
    text = _ROLE_LABELS.sub("", text)
    return text.strip()
