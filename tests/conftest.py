from pathlib import Path

import pytest

from ampsparam.core import RunConfiguration

# Example parameter files shipped with the repository
ex_folder = Path(__file__).resolve().parents[1] / "data" / "examples"
EXAMPLE_PARAM_PATH = ex_folder / "AMPS_PARAM_sep2017.in"


@pytest.fixture
def default_config() -> RunConfiguration:
    """Provides a fresh RunConfiguration with the built-in defaults."""
    return RunConfiguration()


@pytest.fixture(scope="session")
def example_param_text() -> str:
    """Text of the example AMPS_PARAM.in file (hand-edited, points output, helium)."""
    return EXAMPLE_PARAM_PATH.read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def example_param_path() -> Path:
    """Path to the example AMPS_PARAM.in file."""
    return EXAMPLE_PARAM_PATH


class Helpers:
    @staticmethod
    def param_lines(text: str) -> dict[str, str]:
        """
        Maps each active keyword line of generated text to its value, inline comment removed.
        Fails on duplicated keywords, which generated files never contain.
        """
        found: dict[str, str] = {}
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped[0] in "!#" or stripped.upper().startswith("POINT"):
                continue
            key, _, value = stripped.partition(" ")
            assert key not in found, f"duplicate keyword {key}"
            found[key] = value.split("!")[0].strip()
        return found

    @staticmethod
    def section_names(text: str) -> list[str]:
        """Section headers of a file, in order."""
        return [line.strip()[1:] for line in text.splitlines() if line.startswith("#")]


@pytest.fixture
def helpers() -> type[Helpers]:
    return Helpers
