"""Exceptions raised by the generator pipeline.

Every hard failure derives from GeneratorError so the CLI can turn it into
a single non-zero exit. ContractError is returned, not raised, by
contract.check_implementation.
"""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for errors that abort a generator run."""


class DocumentLoadError(GeneratorError):
    """The OpenAPI document could not be read or is not OpenAPI 3.x."""


class ConventionError(GeneratorError):
    """An actor operation does not follow the /method/<name> convention."""


class NoActorTypesError(GeneratorError):
    """No actor could be derived from the document."""


class RenderError(GeneratorError):
    """Templates could not be rendered or output could not be written."""


class ConfigError(GeneratorError):
    """Invalid generator configuration."""


class ContractError(Exception):
    """An implementation class does not satisfy a generated actor contract."""

    def __init__(self, actor_type: str, violations: list[str]) -> None:
        self.actor_type = actor_type
        self.violations = list(violations)
        details = "; ".join(self.violations)
        super().__init__(f"{actor_type} contract not satisfied: {details}")
