"""Response strategies for AI agent chat.

A strategy maps an agent's specialization tag to a set of candidate replies;
the chat service picks one at random. The canned strategy ships with the app
and a generation backend can replace it without changing the chat service.
"""

from collections.abc import Mapping, Sequence
from typing import Protocol

FALLBACK_TAG = "general"

DEFAULT_RESPONSES: dict[str, tuple[str, ...]] = {
    "general": (
        "Great question! Let's break it down into a few concrete next steps.",
        "I hear you. Start with the one thing that moves the needle most today.",
        "That's a smart thing to focus on. What would success look like by Friday?",
    ),
    "productivity": (
        "Try time-blocking your top three tasks before you open your inbox.",
        "Batch the small stuff. Knock out quick wins in one 30-minute sprint.",
        "Protect your deep work hours and let everything else fit around them.",
    ),
    "document": (
        "Keep contracts and invoices in separate folders so they're easy to find at tax time.",
        "A consistent naming scheme like YYYY-MM-client-topic makes search painless.",
        "Archive anything older than a year to keep your Briefcase focused.",
    ),
    "marketing": (
        "Pick one channel where your ideal client already hangs out and show up there consistently.",
        "Turn your last client win into a short case study. Social proof sells.",
        "Lead with the problem you solve, not the service you offer.",
    ),
    "finance": (
        "Set aside a fixed percentage of every payment for taxes the day it lands.",
        "Review your recurring subscriptions monthly and cut anything you haven't used.",
        "Know your runway: cash on hand divided by monthly burn.",
    ),
    "strategy": (
        "Decide what you'll say no to this quarter. Focus is a strategy.",
        "Map your offers against effort and profit, then double down on the top corner.",
        "Write down the one metric that tells you the business is healthy.",
    ),
    "legal": (
        "Put every client engagement in writing, even a one-page agreement helps.",
        "Check that your contracts spell out payment terms and late fees.",
        "When in doubt, have a qualified attorney review anything you sign.",
    ),
    "operations": (
        "Document any task you do more than twice so it can be automated or delegated.",
        "Build a simple weekly review to catch loose ends before they pile up.",
        "Templates for proposals and onboarding will save you hours every month.",
    ),
    "hr": (
        "Before hiring, write down exactly which outcomes the new person will own.",
        "Start contractors on a small paid trial project.",
        "Clear expectations up front prevent most people problems later.",
    ),
    "creative": (
        "Give yourself a constraint. Limits spark better ideas than a blank page.",
        "Ship a rough version today and refine it with real feedback.",
        "Keep an idea file and revisit it when you're stuck.",
    ),
    "wellness": (
        "Schedule breaks like meetings. Your energy is your biggest asset.",
        "A short walk between work blocks does wonders for focus.",
        "Set a hard stop for the workday and honor it.",
    ),
}


class ResponseStrategy(Protocol):
    """Produces candidate replies for an agent specialization tag."""

    def candidates(self, tag: str) -> Sequence[str]:
        """Return a non-empty sequence of candidate replies for tag."""
        ...


class CannedResponseStrategy:
    """ResponseStrategy backed by a fixed table of replies.

    Tags are matched case-insensitively. Unknown tags fall back to the
    fallback tag's replies.
    """

    def __init__(
        self,
        responses: Mapping[str, Sequence[str]] | None = None,
        fallback_tag: str = FALLBACK_TAG,
    ):
        table = DEFAULT_RESPONSES if responses is None else responses
        self._responses = {tag.strip().lower(): tuple(replies) for tag, replies in table.items()}
        self._fallback_tag = fallback_tag.strip().lower()

        if not self._responses.get(self._fallback_tag):
            raise ValueError(f"Fallback tag {fallback_tag!r} must have at least one response")

    def candidates(self, tag: str) -> Sequence[str]:
        replies = self._responses.get(tag.strip().lower())
        if not replies:
            return self._responses[self._fallback_tag]
        return replies

    @property
    def tags(self) -> list[str]:
        """Tags with their own replies, sorted."""
        return sorted(self._responses)
