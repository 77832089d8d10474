"""Unit tests for runner discovery and schema matching."""

from collections.abc import Callable

from runner_directives.core.discovery import find_exported_runners, find_exported_schemas
from runner_directives.core.syntax import SourceFile
from runner_directives.models import RunnerDeclaration, SchemaDeclaration

ParseTs = Callable[[str], SourceFile]


class TestFindExportedRunners:
    def test_exported_async_function(self, parse_ts: ParseTs) -> None:
        source = 'export async function fetchData() { "use runner"; return 1; }\nexport const FetchDataSchema = {};\n'
        runners = find_exported_runners(parse_ts(source))
        assert runners == [RunnerDeclaration(name="fetchData", line=1)]

    def test_exported_async_arrow(self, parse_ts: ParseTs) -> None:
        source = """import { z } from "zod";

export const exampleTitleVisibleTest: Runner<
  typeof ExampleTitleInputSchema
> = async (ctx, input) => {
  "use runner";
  return input;
};
"""
        runners = find_exported_runners(parse_ts(source))
        assert runners == [RunnerDeclaration(name="exampleTitleVisibleTest", line=3)]

    def test_non_exported_and_non_async_are_skipped(self, parse_ts: ParseTs) -> None:
        source = """
async function internal() {}
export function sync() {}
export const plain = () => {};
export const value = 42;
const hidden = async () => {};
"""
        assert find_exported_runners(parse_ts(source)) == []

    def test_preserves_order_and_duplicates(self, parse_ts: ParseTs) -> None:
        source = """export const testTwo = async () => {};
export async function testOne() {}
export let testTwo2 = async () => {}, other = 1;
"""
        runners = find_exported_runners(parse_ts(source))
        assert [(r.name, r.line) for r in runners] == [("testTwo", 1), ("testOne", 2), ("testTwo2", 3)]

    def test_multiline_declaration_reports_declaration_line(self, parse_ts: ParseTs) -> None:
        source = "\n\nexport const\n  delayed =\n    async () => {};\n"
        runners = find_exported_runners(parse_ts(source))
        assert runners == [RunnerDeclaration(name="delayed", line=3)]

    def test_keywords_in_comments_do_not_count(self, parse_ts: ParseTs) -> None:
        source = "// export async function ghost() {}\nconst s = 'export async function other() {}';\n"
        assert find_exported_runners(parse_ts(source)) == []


class TestFindExportedSchemas:
    def test_schema_matched_to_runner(self, parse_ts: ParseTs) -> None:
        source = 'export async function fetchData() { "use runner"; return 1; }\nexport const FetchDataSchema = { a: 1 };\n'
        source_file = parse_ts(source)
        runners = find_exported_runners(source_file)

        schemas = find_exported_schemas(source_file, [r.name for r in runners])

        assert schemas == [SchemaDeclaration(name="FetchDataSchema", runner_name="fetchData", line=2)]

    def test_unmatched_schema_has_no_runner(self, parse_ts: ParseTs) -> None:
        source = "export const InputSchema = z.object({ url: z.string() });\n"
        schemas = find_exported_schemas(parse_ts(source), ["fetchData"])
        assert schemas == [SchemaDeclaration(name="InputSchema", runner_name=None, line=1)]

    def test_name_match_is_case_insensitive_for_schema(self, parse_ts: ParseTs) -> None:
        source = "export const runSCHEMA = 1;\nexport const other = 2;\nconst localSchema = 3;\n"
        schemas = find_exported_schemas(parse_ts(source), ["run"])
        assert schemas == [SchemaDeclaration(name="runSCHEMA", runner_name="run", line=1)]

    def test_first_runner_in_list_wins(self, parse_ts: ParseTs) -> None:
        source = "export const checkTitleSchema = {};\n"
        schemas = find_exported_schemas(parse_ts(source), ["check", "checkTitle"])
        assert schemas[0].runner_name == "check"

    def test_runner_match_ignores_case(self, parse_ts: ParseTs) -> None:
        source = "export const FetchDataSchema = {};\n"
        assert find_exported_schemas(parse_ts(source), ["FetchData", "fetchData"])[0].runner_name == "FetchData"
        assert find_exported_schemas(parse_ts(source), ["fetchData"])[0].runner_name == "fetchData"
        assert find_exported_schemas(parse_ts(source), ["fetchDatum"])[0].runner_name is None
