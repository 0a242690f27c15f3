"""Target-language check with a single corrective translation pass."""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from review_advisor.config import Settings
from review_advisor.generation.client import TextGenerator
from review_advisor.generation.prompts import PromptBuilder

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.3

SCRIPT_PATTERNS: Dict[str, re.Pattern[str]] = {
    # Radicals, iteration/numeral marks, unified ideographs (incl. extensions)
    # and compatibility ideographs.
    "han": re.compile(
        "[⺀-⿟々〇〡-〩〸-〻"
        "㐀-䶿一-鿿豈-﫿\U00020000-\U0003ffff]"
    ),
    "hiragana": re.compile("[ぁ-ゟ]"),
    "katakana": re.compile("[゠-ヿㇰ-ㇿｦ-ﾝ]"),
    "hangul": re.compile("[ᄀ-ᇿ㄰-㆏가-힯]"),
}


def script_ratio(text: str, script: str = "han") -> float:
    """Fraction of characters in ``text`` that belong to ``script``."""
    if not text:
        return 0.0
    pattern = SCRIPT_PATTERNS[script]
    return len(pattern.findall(text)) / len(text)


class LanguageConformanceGate:
    """
    Accepts generated text that is written in the target script, otherwise
    asks the generator once for a translation.

    At most one corrective call is made per ``ensure``; its result is returned
    whether or not it conforms.
    """

    def __init__(
        self,
        generator: TextGenerator,
        prompts: Optional[PromptBuilder] = None,
        threshold: float = DEFAULT_THRESHOLD,
        script: str = "han",
    ) -> None:
        if script not in SCRIPT_PATTERNS:
            raise ValueError(
                f"Unknown script: {script}. Valid scripts: {sorted(SCRIPT_PATTERNS)}"
            )
        self.generator = generator
        self.prompts = prompts or PromptBuilder()
        self.threshold = threshold
        self.script = script

    @classmethod
    def from_settings(
        cls,
        generator: TextGenerator,
        prompts: PromptBuilder,
        settings: Settings,
    ) -> "LanguageConformanceGate":
        return cls(
            generator,
            prompts,
            threshold=settings.conformance_threshold,
            script=settings.target_script,
        )

    def conforms(self, text: str) -> bool:
        # Empty output has nothing to translate.
        if not text:
            return True
        return script_ratio(text, self.script) >= self.threshold

    def ensure(self, text: str) -> str:
        if self.conforms(text):
            return text

        ratio = script_ratio(text, self.script)
        logger.warning(
            f"Generated text is {ratio:.0%} {self.script} "
            f"(threshold {self.threshold:.0%}); requesting translation"
        )
        return self.generator.generate(self.prompts.translation(text))
