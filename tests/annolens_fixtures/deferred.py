"""Overrides of EagerBase written with postponed annotations."""

from __future__ import annotations

from typing import Optional

from annolens_fixtures.eager import EagerBase


class DeferredChild(EagerBase):
    def attach(self, parent: Optional[EagerBase]) -> None:
        pass

    def rename(self, names: list[str], label: "str") -> None:
        pass
