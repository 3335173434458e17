"""Simple built-in tools: final answer, thinking, planning, arithmetic and weather."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from echoagent.errors import ExecutionFailedError, InvalidParameterError, MissingParameterError
from echoagent.tooling import Tool, ToolResult

logger = logging.getLogger(__name__)


def _require_str(parameters: Mapping[str, Any], name: str) -> str:
    value = parameters.get(name)
    if not isinstance(value, str):
        raise MissingParameterError(name)
    return value


def _require_number(parameters: Mapping[str, Any], name: str) -> float:
    value = parameters.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MissingParameterError(name)
    return float(value)


def _format_number(value: float) -> str:
    """Render a float in plain decimal notation, dropping a trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _operands(parameters: Mapping[str, Any]) -> tuple[float, float]:
    return _require_number(parameters, "a"), _require_number(parameters, "b")


def _operand_schema(first: str, second: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "a": {"type": "number", "description": first},
            "b": {"type": "number", "description": second},
        },
        "required": ["a", "b"],
    }


class FinalAnswerTool(Tool):
    """Returns the agent's final answer."""

    name = "final_answer"
    description = "当你已经收集到足够信息可以回答用户问题时，调用此工具返回最终答案"
    parameters = {
        "type": "object",
        "properties": {"answer": {"type": "string", "description": "最终答案"}},
        "required": ["answer"],
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        answer = parameters.get("answer")
        if not isinstance(answer, str):
            raise InvalidParameterError("answer", "answer is required")
        return ToolResult.ok(answer)


class ThinkTool(Tool):
    """Echoes the model's reasoning back into the conversation."""

    name = "think"
    description = "在采取行动前，使用此工具记录推理和分析过程。参数：reasoning - 你对问题的分析和计划。"
    parameters = {
        "type": "object",
        "properties": {
            "reasoning": {
                "type": "string",
                "description": "你的思考过程：分析问题、制定计划、推理步骤",
            }
        },
        "required": ["reasoning"],
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        reasoning = _require_str(parameters, "reasoning")
        logger.info("Think: %s", reasoning)
        return ToolResult.ok(reasoning)


class PlanTool(Tool):
    """Records an analysis and a strategy for a complex problem."""

    name = "plan"
    description = "分析复杂问题并制定详细的执行计划。将大任务拆解为多个有序的子任务。"
    parameters = {
        "type": "object",
        "properties": {
            "analysis": {
                "type": "string",
                "description": "对问题的深入分析：难点、需要的信息、可能的方法",
            },
            "strategy": {
                "type": "string",
                "description": "解决策略：说明如何一步步解决这个问题",
            },
        },
        "required": ["analysis", "strategy"],
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        analysis = _require_str(parameters, "analysis")
        strategy = _require_str(parameters, "strategy")
        plan = (
            f"📋 计划已制定\n\n分析:\n{analysis}\n\n策略:\n{strategy}\n\n"
            "请使用 create_task 创建具体的子任务"
        )
        logger.debug("Task plan parameters: %r", dict(parameters))
        logger.info("Task plan:%s", plan)
        return ToolResult.ok(plan)


class AddTool(Tool):
    name = "add"
    description = "两数相加，参数：a - 第一个加数，b - 第二个加数"
    parameters = _operand_schema("第一个数", "第二个数")

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        a, b = _operands(parameters)
        return ToolResult.ok(f"{_format_number(a)} + {_format_number(b)} = {_format_number(a + b)}")


class SubtractTool(Tool):
    name = "subtract"
    description = "两数相减，参数：a - 被减数，b - 减数"
    parameters = _operand_schema("被减数", "减数")

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        a, b = _operands(parameters)
        return ToolResult.ok(f"{_format_number(a)} - {_format_number(b)} = {_format_number(a - b)}")


class MultiplyTool(Tool):
    name = "multiply"
    description = "两数相乘，参数：a - 第一个乘数，b - 第二个乘数"
    parameters = _operand_schema("第一个乘数", "第二个乘数")

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        a, b = _operands(parameters)
        return ToolResult.ok(f"{_format_number(a)} * {_format_number(b)} = {_format_number(a * b)}")


class DivideTool(Tool):
    name = "divide"
    description = "两数相除，参数：a - 被除数，b - 除数"
    parameters = _operand_schema("被除数", "除数")

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        a, b = _operands(parameters)
        if b == 0.0:
            raise ExecutionFailedError("divide", "除数不能为 0")
        return ToolResult.ok(f"{_format_number(a)} / {_format_number(b)} = {_format_number(a / b)}")


class WeatherTool(Tool):
    """Reports canned weather for a city and date."""

    name = "query_weather"
    description = "我可以帮你查询天气奥。"
    parameters = {
        "type": "object",
        "properties": {
            "city": {"type": "string", "description": "城市名称"},
            "date": {"type": "string", "description": "日期"},
        },
        "required": ["city", "date"],
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        city = _require_str(parameters, "city")
        date = _require_str(parameters, "date")
        return ToolResult.ok(f"{city} 的 {date} 天气是暴雨，温度 30摄氏度。")