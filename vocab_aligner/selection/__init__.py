"""选择模块

将多对多的候选对齐收窄为最终对齐：
- models: 选择策略与统计数据结构
- ranked: 贪心 1 对 1 选择
- selector: 阈值 + 策略 + 支持证据选择
- interactive: 基于 Oracle 反馈的交互式选择
- oracle: Oracle 接口与实现
"""

from .models import SelectionType, SupportRule, InteractionStats
from .ranked import RankedSelector
from .selector import Selector
from .oracle import Oracle, ReferenceOracle, TimeoutOracle
from .interactive import InteractiveSelector, variance

__all__ = [
    "SelectionType",
    "SupportRule",
    "InteractionStats",
    "RankedSelector",
    "Selector",
    "Oracle",
    "ReferenceOracle",
    "TimeoutOracle",
    "InteractiveSelector",
    "variance",
]
