"""pytest-bdd step definitions and per-scenario state."""

from e2e_harness.steps.context import ScenarioContext

__all__ = ["ScenarioContext"]
