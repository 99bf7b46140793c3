from __future__ import annotations

import unittest

from pocketledger.domain.schemas import ToolRequest, ToolResponse
from pocketledger.tools.base import Tool, ToolSpec
from pocketledger.tools.registry import ToolRegistry


class _FakeTool(Tool):
    name = "fake_tool"
    description = "Echoes its args."

    def run(self, request: ToolRequest) -> ToolResponse:
        return self.ok(request, {"echo": request.args})

    def spec(self) -> ToolSpec:
        return ToolSpec(name=self.name, description=self.description, args_schema={"type": "object"})


class ToolRegistryTests(unittest.TestCase):
    def test_tool_request_schema_shape(self) -> None:
        payload = {
            "request_id": "req_01HZYQ3",
            "tool": "ledger.category_summary",
            "args": {"date_range": {"start": "2026-01-01", "end": "2026-01-31"}},
            "context": {"user_id": "u_123", "currency": "EUR"},
        }
        request = ToolRequest.model_validate(payload)
        self.assertEqual(request.tool, "ledger.category_summary")
        self.assertEqual(request.args["date_range"]["start"], "2026-01-01")
        self.assertEqual(request.context.currency, "EUR")

    def test_register_and_get_tool(self) -> None:
        registry = ToolRegistry()
        tool = _FakeTool()
        registry.register(tool)

        self.assertIs(registry.get_tool("fake_tool"), tool)
        self.assertEqual(registry.names(), ["fake_tool"])

    def test_get_missing_tool_raises_key_error(self) -> None:
        registry = ToolRegistry()

        with self.assertRaises(KeyError):
            registry.get_tool("missing")

    def test_name_clash_between_tool_classes_is_rejected(self) -> None:
        class _Impostor(_FakeTool):
            pass

        registry = ToolRegistry()
        registry.register(_FakeTool())
        registry.register(_FakeTool())

        with self.assertRaises(ValueError):
            registry.register(_Impostor())

    def test_names_filter_by_namespace(self) -> None:
        import pocketledger.tools  # noqa: F401
        from pocketledger.tools.registry import registry as global_registry

        self.assertEqual(global_registry.names("target"), ["target.emergency_fund"])
        self.assertIn("ledger.month_summary", global_registry)
        self.assertEqual(len(global_registry.list_specs("ledger")), 4)

    def test_fail_marks_response_not_ok(self) -> None:
        request = ToolRequest(request_id="r1", tool="fake_tool", context={"user_id": "u1"})

        response = _FakeTool().fail(request, "boom")

        self.assertFalse(response.ok)
        self.assertEqual(response.errors, ["boom"])
        self.assertEqual(response.request_id, "r1")

    def test_builtin_tools_self_register_on_import(self) -> None:
        import pocketledger.tools  # noqa: F401
        from pocketledger.tools.registry import registry as global_registry

        names = {spec.name for spec in global_registry.list_specs()}

        self.assertEqual(
            names,
            {
                "ledger.month_summary",
                "ledger.category_summary",
                "ledger.running_balance",
                "ledger.daily_cashflow",
                "target.emergency_fund",
            },
        )


if __name__ == "__main__":
    unittest.main()
