"""Classes outside the annotated package."""

from __future__ import annotations

from annolens_fixtures.webapp.actions import CrudAction


class PlainAction(CrudAction):
    pass


class Standalone:
    def run(self) -> None:
        pass
