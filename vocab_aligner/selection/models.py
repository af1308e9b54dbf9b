"""选择策略数据模型

选择策略与支持证据规则的枚举定义。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from ..utils import parse_enum


class SelectionType(Enum):
    """选择策略

    STRICT: 贪心 1 对 1 选择
    PERMISSIVE: 保留对源或目标而言最佳的映射（允许一对多）
    HYBRID: 高置信映射全部保留，其余按 1 对 1 贪心选择
    """

    STRICT = "strict"
    PERMISSIVE = "permissive"
    HYBRID = "hybrid"

    @classmethod
    def parse(cls, value) -> "SelectionType":
        return parse_enum(cls, value, "selection policy")


class SupportRule(Enum):
    """支持对齐的使用规则

    VALIDATE: 以支持对齐中的相似度作为有效分数，未通过阈值的映射被丢弃
    RESCUE: 有效分数取主对齐与支持对齐相似度的最大值，可挽回低于阈值的映射
    """

    VALIDATE = "validate"
    RESCUE = "rescue"

    @classmethod
    def parse(cls, value) -> "SupportRule":
        return parse_enum(cls, value, "support rule")


@dataclass
class InteractionStats:
    """一次交互式选择的 Oracle 调用统计"""

    positive: int = 0
    negative: int = 0
    budget_exhausted: bool = False

    @property
    def total(self) -> int:
        return self.positive + self.negative

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "positive": self.positive,
            "negative": self.negative,
            "total": self.total,
            "budget_exhausted": self.budget_exhausted,
        }
