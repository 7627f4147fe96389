"""Annotated package: every class below inherits Secured('package') as a fallback."""

from annolens import annotate_package
from annolens_fixtures.kinds import Secured

annotate_package(__name__, Secured(role="package"))
