"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from runner_directives.core.syntax import SourceFile, parse_source

_TESTS_ROOT = Path(__file__).parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        parts = test_path.relative_to(_TESTS_ROOT).parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def parse_ts() -> Callable[[str], SourceFile]:
    """Return a helper that parses TypeScript source into a SourceFile."""

    def _parse(source: str) -> SourceFile:
        return parse_source(source, "typescript", path="test.ts")

    return _parse


@pytest.fixture
def runner_project(tmp_path: Path) -> Path:
    """A small project with runner files, plain files and excluded directories."""
    files = {
        "src/runners/fetch.ts": (
            "export async function fetchData() {\n"
            '  "use runner";\n'
            "  return 1;\n"
            "}\n"
            "export const FetchDataSchema = { url: 'string' };\n"
        ),
        "src/runners/module.ts": (
            "'use runner';\n"
            "\n"
            "export const testOne = async (ctx) => {\n"
            "  return ctx;\n"
            "};\n"
        ),
        "src/plain.ts": "export async function notARunner() {\n  return 2;\n}\n",
        "runners/cookie.ts": (
            "export const cookieBannerVisible = async (ctx, input) => {\n"
            '  "use runner";\n'
            "  return input;\n"
            "};\n"
            "export const CookieBannerVisibleInputSchema = {};\n"
        ),
        "src/node_modules/pkg/index.ts": 'export async function hidden() { "use runner"; }\n',
        "src/dist/out.ts": 'export async function built() { "use runner"; }\n',
    }
    for relative, content in files.items():
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return tmp_path
