from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WizardSessionKeys:
    """Namespaced session-state keys for wizard widgets."""

    wizard_id: str

    @property
    def prefix(self) -> str:
        return f"wiz:{self.wizard_id}:"

    def namespace(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def widget(self, step_id: str, field: str, *parts: object) -> str:
        """Return the widget key for ``field`` on ``step_id``.

        Extra ``parts`` disambiguate widgets rendered per option or row.
        """

        suffix = "".join(f".{part}" for part in parts)
        return self.namespace(f"{step_id}.{field}{suffix}")

    def action(self, name: str) -> str:
        return self.namespace(f"action.{name}")
