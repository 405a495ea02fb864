"""Section-rooted facade over a :class:`LayeredConfiguration`.

A view is what ``getConfiguration("section", scope)`` hands back to code under
test. It owns no data; it prefixes every relative section with its bound
section and forwards the call, so consumers cannot tell they are working on a
subtree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NoReturn

from ..domain.errors import UnsupportedOperation
from ..domain.scopes import TargetArgument
from ..domain.store import join_sections, parse_section

if TYPE_CHECKING:
    from .configuration import LayeredConfiguration


@dataclass(frozen=True, slots=True)
class ScopedConfigurationView:
    """Immutable binding of configuration, section prefix and language id.

    Composition is syntactic: ``view.get("v2")`` on a view bound to
    ``"other.place"`` is exactly ``configuration.get("other.place.v2")``. An
    empty prefix behaves as the root; an empty relative section addresses the
    prefix itself.

    Examples
    --------
    >>> from lib_workspace_config.application.configuration import LayeredConfiguration
    >>> cfg = LayeredConfiguration()
    >>> view = cfg.scoped("other.place")
    >>> view.update("v2", "deux", True)
    >>> cfg.get("other.place.v2"), view.get(""), view.has("v3")
    ('deux', {'v2': 'deux'}, False)
    """

    configuration: LayeredConfiguration
    prefix: str = ""
    language_id: str | None = None

    def get(self, section: str, default: Any = None) -> Any:
        return self.configuration.get(self.qualify(section), default, self.language_id)

    def has(self, section: str) -> bool:
        return self.configuration.has(self.qualify(section), self.language_id)

    def update(
        self,
        section: str,
        value: Any,
        target: TargetArgument = None,
        override_in_language: bool | None = False,
    ) -> None:
        """Forward a write; the bound language id selects the overlay when requested."""

        self.configuration.update(
            self.qualify(section),
            value,
            target,
            override_in_language,
            self.language_id,
        )

    def inspect(self, section: str) -> NoReturn:
        raise UnsupportedOperation("ScopedConfigurationView.inspect is not yet supported")

    def scoped(self, section: str) -> ScopedConfigurationView:
        """Return a deeper view sharing this view's configuration and language id."""

        return ScopedConfigurationView(self.configuration, self.qualify(section), self.language_id)

    def qualify(self, section: str) -> str:
        """Return *section* prefixed with this view's bound section."""

        parse_section(section)
        return join_sections(self.prefix, section)
