from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Protocol

from rich.console import Console, RenderableType
from rich.prompt import Confirm, Prompt
from rich.text import Text

from brand_registry.models import AnswerSet, SchemaEnumerations
from brand_registry.record_builder import build_record
from brand_registry.rendering import aliases_preview, hex_preview, record_preview
from brand_registry.validators import (
    filter_license_types,
    validate_alias_list,
    validate_hex,
    validate_optional_url,
    validate_title,
    validate_url,
)


class PromptIO(Protocol):
    def ask_text(self, message: str) -> str: ...

    def ask_confirm(self, message: str, default: bool) -> bool: ...

    def show(self, renderable: RenderableType) -> None: ...

    def show_error(self, reason: str) -> None: ...


class RichPromptIO:
    """Blocking terminal prompts backed by rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def ask_text(self, message: str) -> str:
        return Prompt.ask(message, console=self.console, default="", show_default=False)

    def ask_confirm(self, message: str, default: bool) -> bool:
        return Confirm.ask(message, console=self.console, default=default)

    def show(self, renderable: RenderableType) -> None:
        self.console.print(renderable)

    def show_error(self, reason: str) -> None:
        self.console.print(Text(f">> {reason}", style="red"))


class PromptState(str, Enum):
    title = "title"
    hex = "hex"
    source = "source"
    ask_guidelines = "ask_guidelines"
    guidelines = "guidelines"
    ask_license = "ask_license"
    license_type = "license_type"
    license_url = "license_url"
    ask_aliases = "ask_aliases"
    select_alias_categories = "select_alias_categories"
    alias_list = "alias_list"
    confirm = "confirm"
    done = "done"
    aborted = "aborted"


TERMINAL_STATES = frozenset({PromptState.done, PromptState.aborted})


class PromptOrchestrator:
    """Runs the add-brand prompt sequence as an explicit state machine.

    Each handler runs one prompt and returns the next state. A rejected answer
    shows its reason and returns the same state, so nothing is recorded for it.
    """

    def __init__(
        self,
        io: PromptIO,
        existing: Iterable[Mapping[str, Any]],
        enumerations: SchemaEnumerations,
        data_label: str = "brands.json",
    ) -> None:
        self.io = io
        self.existing = list(existing)
        self.enumerations = enumerations
        self.data_label = data_label

        self.state = PromptState.title
        self.answers = AnswerSet()
        self._alias_index = 0

        self._handlers: dict[PromptState, Callable[[], PromptState]] = {
            PromptState.title: self._title,
            PromptState.hex: self._hex,
            PromptState.source: self._source,
            PromptState.ask_guidelines: self._ask_guidelines,
            PromptState.guidelines: self._guidelines,
            PromptState.ask_license: self._ask_license,
            PromptState.license_type: self._license_type,
            PromptState.license_url: self._license_url,
            PromptState.ask_aliases: self._ask_aliases,
            PromptState.select_alias_categories: self._select_alias_categories,
            PromptState.alias_list: self._alias_list,
            PromptState.confirm: self._confirm,
        }

    def run(self) -> AnswerSet:
        while self.state not in TERMINAL_STATES:
            self.state = self._handlers[self.state]()
        return self.answers

    @property
    def confirmed(self) -> bool:
        return self.state == PromptState.done

    def _ask(self, message: str, validator: Callable[[str], Optional[str]]) -> Optional[str]:
        text = self.io.ask_text(message)
        reason = validator(text)
        if reason is not None:
            self.io.show_error(reason)
            return None
        return text

    def _title(self) -> PromptState:
        text = self._ask("Title", lambda t: validate_title(t, self.existing))
        if text is None:
            return PromptState.title
        self.answers.title = text
        return PromptState.hex

    def _hex(self) -> PromptState:
        text = self._ask("Hex", validate_hex)
        if text is None:
            return PromptState.hex
        self.io.show(hex_preview(text))
        self.answers.hex = text
        return PromptState.source

    def _source(self) -> PromptState:
        text = self._ask("Source URL", validate_url)
        if text is None:
            return PromptState.source
        self.answers.source = text
        return PromptState.ask_guidelines

    def _ask_guidelines(self) -> PromptState:
        self.answers.has_guidelines = self.io.ask_confirm("The brand has brand guidelines?", default=True)
        return PromptState.guidelines if self.answers.has_guidelines else PromptState.ask_license

    def _guidelines(self) -> PromptState:
        text = self._ask("Guidelines URL", validate_url)
        if text is None:
            return PromptState.guidelines
        self.answers.guidelines = text
        return PromptState.ask_license

    def _ask_license(self) -> PromptState:
        self.answers.has_license = self.io.ask_confirm("The brand has a brand license?", default=True)
        return PromptState.license_type if self.answers.has_license else PromptState.ask_aliases

    def _license_type(self) -> PromptState:
        types = self.enumerations.license_types
        query = self.io.ask_text("License type (type to search)")
        candidates = filter_license_types(types, query)
        exact = [t for t in candidates if t.lower() == query.strip().lower()]

        if exact:
            choice = exact[0]
        elif len(candidates) == 1:
            choice = candidates[0]
        else:
            if candidates:
                self.io.show(Text("\n".join(f"  {t}" for t in candidates), style="cyan"))
                self.io.show_error("Narrow the search down to one license type")
            else:
                self.io.show_error(f"No license type matches {query.strip()!r}")
            return PromptState.license_type

        self.io.show(Text(f"License type: {choice}", style="cyan"))
        self.answers.license_type = choice
        return PromptState.license_url

    def _license_url(self) -> PromptState:
        text = self._ask("License URL (optional)", validate_optional_url)
        if text is None:
            return PromptState.license_url
        self.answers.license_url = text
        return PromptState.ask_aliases

    def _ask_aliases(self) -> PromptState:
        self.answers.has_aliases = self.io.ask_confirm("The brand has brand aliases?", default=False)
        return PromptState.select_alias_categories if self.answers.has_aliases else PromptState.confirm

    def _select_alias_categories(self) -> PromptState:
        self.io.show(Text("What types of aliases do you want to add?", style="bold"))
        selected = [
            c.key
            for c in self.enumerations.alias_categories
            if self.io.ask_confirm(f"  {c.key}: {c.description}", default=False)
        ]
        self.answers.alias_categories = selected
        self._alias_index = 0
        return PromptState.alias_list if selected else PromptState.confirm

    def _alias_list(self) -> PromptState:
        key = self.answers.alias_categories[self._alias_index]
        text = self._ask(f"{key} (separate with commas)", validate_alias_list)
        if text is None:
            return PromptState.alias_list
        self.io.show(aliases_preview(text))
        self.answers.alias_lists[key] = text

        self._alias_index += 1
        if self._alias_index < len(self.answers.alias_categories):
            return PromptState.alias_list
        return PromptState.confirm

    def _confirm(self) -> PromptState:
        record = build_record(self.answers)
        self.io.show(record_preview(record.to_dict(), self.data_label))
        self.answers.confirmed = self.io.ask_confirm("Is this OK?", default=True)
        return PromptState.done if self.answers.confirmed else PromptState.aborted
