"""Story templates for the different narrative styles.

Each style is one StoryTemplate subclass. All of them render the same
facts; only the vocabulary changes. Settings decide which context
sentences are added:

- brief: core sentence only
- standard: core plus enabled time / line / language context
- detailed: standard plus a significance remark and a tone sign-off
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timezone, tzinfo
from typing import TYPE_CHECKING, Sequence

from ..errors import SettingsValidationError
from ..settings import StoryLength, StorySettings, StoryStyle, StoryTone, coerce_enum
from .formatting import (
    TimeSpan,
    describe_persona,
    format_date,
    format_duration,
    format_languages,
    format_percentage,
    plural,
    time_of_day,
)

if TYPE_CHECKING:
    from ..enrichment.patterns import CommitPattern
    from ..enrichment.persona import DeveloperPersona
    from ..stats import LanguageShare

QUIET_PHRASE = "no recorded activity in this period"

TONE_SIGN_OFFS: dict[StoryTone, str] = {
    StoryTone.ENTHUSIASTIC: "What a run - here's to the next one!",
    StoryTone.PROFESSIONAL: "This concludes the summary of the period.",
    StoryTone.CASUAL: "Anyway, nice work.",
}


class StoryTemplate(ABC):
    """Renders intro, pattern, achievement and conclusion blocks for one style."""

    style: StoryStyle
    # Joins the sentences of one block
    separator = " "

    def __init__(self, settings: StorySettings | None = None, tz: tzinfo | None = None):
        self.settings = settings or StorySettings(style=self.style)
        self.tz = tz or timezone.utc

    # -- public contract -------------------------------------------------

    def intro(
        self,
        commit_count: int,
        persona: DeveloperPersona,
        languages: Sequence[LanguageShare] = (),
    ) -> str:
        parts = [self.intro_core(commit_count, persona, describe_persona(persona))]
        if self.adds_context and self.settings.include_language_context and languages:
            parts.append(self.language_context(format_languages(languages)))
        return self.compose(parts)

    def pattern(self, pattern: CommitPattern) -> str:
        parts = [self.pattern_core(pattern)]
        if self.adds_context:
            if self.settings.include_time_context:
                local_start = pattern.start_time.astimezone(self.tz)
                parts.append(self.time_context(time_of_day(local_start.hour)))
            if self.settings.include_line_changes:
                parts.append(self.line_context(pattern))
        if self.settings.length is StoryLength.DETAILED:
            parts.append(self.significance_remark(format_percentage(pattern.significance)))
        return self.compose(parts)

    @abstractmethod
    def achievement(self, description: str) -> str: ...

    def conclusion(self, time_span: TimeSpan, persona: DeveloperPersona) -> str:
        parts = [self.conclusion_core(time_span, persona, describe_persona(persona))]
        if self.settings.length is StoryLength.DETAILED:
            parts.append(TONE_SIGN_OFFS[self.settings.tone])
        return self.compose(parts)

    @abstractmethod
    def quiet_period(self) -> str:
        """Intro used when there are no commits; contains QUIET_PHRASE."""

    @abstractmethod
    def quiet_conclusion(self) -> str: ...

    # -- helpers ---------------------------------------------------------

    @property
    def adds_context(self) -> bool:
        return self.settings.length is not StoryLength.BRIEF

    def compose(self, parts: Sequence[str]) -> str:
        return self.separator.join(parts)

    def local_date(self, value) -> str:
        return format_date(value.astimezone(self.tz))

    # -- per-style vocabulary -------------------------------------------

    @abstractmethod
    def intro_core(self, commit_count: int, persona: DeveloperPersona, persona_text: str) -> str: ...

    @abstractmethod
    def language_context(self, languages: str) -> str: ...

    @abstractmethod
    def pattern_core(self, pattern: CommitPattern) -> str: ...

    @abstractmethod
    def time_context(self, period: str) -> str: ...

    @abstractmethod
    def line_context(self, pattern: CommitPattern) -> str: ...

    @abstractmethod
    def significance_remark(self, significance: str) -> str: ...

    @abstractmethod
    def conclusion_core(self, time_span: TimeSpan, persona: DeveloperPersona, persona_text: str) -> str: ...


class EpicTemplate(StoryTemplate):
    style = StoryStyle.EPIC

    def intro_core(self, commit_count, persona, persona_text):
        return (
            f"In the vast realm of code, a tale unfolds: a story of {plural(commit_count, 'commit')}, "
            f"each a step in an epic journey. Our protagonist, {persona_text}, "
            "embarks on a quest to build something extraordinary."
        )

    def language_context(self, languages):
        return f"Their weapons of choice: {languages}."

    def pattern_core(self, pattern):
        return (
            f"A new chapter begins as our hero takes on {pattern.description}, "
            f"from {self.local_date(pattern.start_time)} to {self.local_date(pattern.end_time)}."
        )

    def time_context(self, period):
        return f"The work was forged in the {period}."

    def line_context(self, pattern):
        return (
            f"The battlefield shifted by +{pattern.additions}/-{pattern.deletions} lines "
            f"across {plural(pattern.files_changed, 'file')}."
        )

    def significance_remark(self, significance):
        return f"The bards rate this chapter at {significance} significance."

    def achievement(self, description):
        return f"A milestone is reached! {description}."

    def conclusion_core(self, time_span, persona, persona_text):
        return (
            f"And so concludes this chapter of our tale, spanning {format_duration(time_span.duration)} "
            f"from {self.local_date(time_span.start)} to {self.local_date(time_span.end)}. "
            f"Our hero, {persona_text}, continues onward, ready for the next adventure."
        )

    def quiet_period(self):
        return f"The realm lies silent: there is {QUIET_PHRASE}. Even heroes must rest."

    def quiet_conclusion(self):
        return "The tale awaits its next chapter."


class NarrativeTemplate(StoryTemplate):
    style = StoryStyle.NARRATIVE

    def intro_core(self, commit_count, persona, persona_text):
        return f"This is the story of {plural(commit_count, 'commit')}, written by {persona_text}."

    def language_context(self, languages):
        return f"It was told mostly in {languages}."

    def pattern_core(self, pattern):
        return (
            f"Between {self.local_date(pattern.start_time)} and {self.local_date(pattern.end_time)}, "
            f"the work turned to {pattern.description}."
        )

    def time_context(self, period):
        return f"It began in the {period}."

    def line_context(self, pattern):
        return (
            f"Along the way, {pattern.additions} lines were added and "
            f"{pattern.deletions} removed across {plural(pattern.files_changed, 'file')}."
        )

    def significance_remark(self, significance):
        return f"It stands out with a significance of {significance}."

    def achievement(self, description):
        return f"It was a turning point: {description}."

    def conclusion_core(self, time_span, persona, persona_text):
        return (
            f"The story spans {format_duration(time_span.duration)}, from "
            f"{self.local_date(time_span.start)} to {self.local_date(time_span.end)}, "
            f"and its author remains {persona_text}."
        )

    def quiet_period(self):
        return f"The pages stay blank for now: there is {QUIET_PHRASE}."

    def quiet_conclusion(self):
        return "The story will continue when the next commit lands."


class CasualTemplate(StoryTemplate):
    style = StoryStyle.CASUAL

    def intro_core(self, commit_count, persona, persona_text):
        return (
            f"Hey there! Let me tell you about these {plural(commit_count, 'commit')}. "
            f"Our developer here is {persona_text}."
        )

    def language_context(self, languages):
        return f"Languages? Mostly {languages}."

    def pattern_core(self, pattern):
        return (
            f"So, between {self.local_date(pattern.start_time)} and {self.local_date(pattern.end_time)} "
            f"they knocked out {pattern.description}."
        )

    def time_context(self, period):
        return f"Mostly in the {period}, by the way."

    def line_context(self, pattern):
        return (
            f"That's +{pattern.additions}/-{pattern.deletions} lines over "
            f"{plural(pattern.files_changed, 'file')}."
        )

    def significance_remark(self, significance):
        return f"Significance-wise? About {significance}."

    def achievement(self, description):
        return f"Pretty cool - {description}!"

    def conclusion_core(self, time_span, persona, persona_text):
        return (
            f"That's what happened over {format_duration(time_span.duration)}, between "
            f"{self.local_date(time_span.start)} and {self.local_date(time_span.end)}. "
            f"Our developer, {persona_text}, did some great work!"
        )

    def quiet_period(self):
        return f"Nothing to see here: {QUIET_PHRASE}. Time for a break!"

    def quiet_conclusion(self):
        return "Catch you after the next commit!"


class TechnicalTemplate(StoryTemplate):
    style = StoryStyle.TECHNICAL
    separator = "\n"

    def stamp(self, value) -> str:
        return value.astimezone(self.tz).strftime("%Y-%m-%d %H:%M %Z")

    def intro_core(self, commit_count, persona, persona_text):
        return (
            "Technical Analysis Report\n"
            f"Commit Count: {commit_count}\n"
            f"Developer Profile: {persona_text}\n"
            f"Confidence: {format_percentage(persona.confidence)}"
        )

    def language_context(self, languages):
        return f"Top Languages: {languages}"

    def pattern_core(self, pattern):
        return (
            f"Pattern Type: {pattern.type.value}\n"
            f"Commits: {pattern.size}\n"
            f"Summary: {pattern.description}\n"
            f"Period: {self.stamp(pattern.start_time)} to {self.stamp(pattern.end_time)}"
        )

    def time_context(self, period):
        return f"Time of Day: {period}"

    def line_context(self, pattern):
        return (
            f"Line Changes: +{pattern.additions}/-{pattern.deletions} "
            f"across {plural(pattern.files_changed, 'file')}"
        )

    def significance_remark(self, significance):
        return f"Significance: {significance}"

    def achievement(self, description):
        return f"Achievement Unlocked: {description}"

    def conclusion_core(self, time_span, persona, persona_text):
        traits = ", ".join(trait.value for trait in persona.traits) or "none"
        return (
            f"Analysis Period: {self.stamp(time_span.start)} to {self.stamp(time_span.end)} "
            f"({format_duration(time_span.duration)})\n"
            f"Developer Profile: {persona_text}\n"
            f"Traits: {traits}"
        )

    def quiet_period(self):
        return f"Technical Analysis Report\nStatus: {QUIET_PHRASE}"

    def quiet_conclusion(self):
        return "Next Step: awaiting commits"


def get_template(
    style: StoryStyle | str,
    settings: StorySettings | None = None,
    tz: tzinfo | None = None,
) -> StoryTemplate:
    """Return the template for a style.

    Raises:
        SettingsValidationError: if the style is not a StoryStyle
    """
    style = coerce_enum("style", style)

    if style is StoryStyle.EPIC:
        template_cls: type[StoryTemplate] = EpicTemplate
    elif style is StoryStyle.NARRATIVE:
        template_cls = NarrativeTemplate
    elif style is StoryStyle.CASUAL:
        template_cls = CasualTemplate
    elif style is StoryStyle.TECHNICAL:
        template_cls = TechnicalTemplate
    else:
        raise SettingsValidationError(f"No template for style {style!r}", {"style": style})

    return template_cls(settings, tz)
