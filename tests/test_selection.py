"""
选择器测试
"""

import pytest

from vocab_aligner.alignment import Alignment
from vocab_aligner.errors import ConfigurationError
from vocab_aligner.selection import (
    RankedSelector,
    SelectionType,
    Selector,
    SupportRule,
)

from tests.helpers import as_triples, make_alignment


# 贪心选择测试
def test_ranked_selector_worked_example():
    """测试贪心 1 对 1 选择的示例"""
    a = make_alignment((1, 1, 0.9), (1, 2, 0.8), (2, 1, 0.7))
    selected = RankedSelector(SelectionType.STRICT).select(a, 0.5)
    assert as_triples(selected) == [(1, 1, 0.9)]


def test_ranked_selector_respects_threshold(candidates):
    """测试不会返回低于阈值的映射"""
    selected = RankedSelector().select(candidates, 0.6)
    assert all(m.similarity >= 0.6 for m in selected)
    assert as_triples(selected) == [(1, 1, 0.9), (2, 2, 0.65)]


def test_ranked_selector_threshold_is_inclusive():
    """测试阈值包含等于阈值的映射"""
    a = make_alignment((1, 1, 0.6))
    assert len(RankedSelector().select(a, 0.6)) == 1


def test_ranked_selector_idempotent(candidates):
    """测试选择结果再次选择不变"""
    selector = RankedSelector()
    once = selector.select(candidates, 0.5)
    twice = selector.select(once, 0.5)
    assert once == twice
    assert once.is_one_to_one()


def test_ranked_selector_does_not_mutate_input(candidates):
    """测试输入对齐不被修改"""
    before = as_triples(candidates)
    RankedSelector().select(candidates, 0.5)
    assert as_triples(candidates) == before


def test_ranked_selector_empty():
    """测试空输入返回空输出"""
    assert len(RankedSelector().select(Alignment(), 0.0)) == 0


def test_ranked_selector_rejects_non_strict():
    """测试 RankedSelector 仅支持严格策略"""
    with pytest.raises(ConfigurationError):
        RankedSelector(SelectionType.PERMISSIVE)


# 策略选择测试
def test_selector_strict_matches_ranked(candidates):
    """测试严格策略与贪心选择一致"""
    strict = Selector(0.5, SelectionType.STRICT).filter(candidates)
    assert strict == RankedSelector().select(candidates, 0.5)


def test_selector_permissive_allows_many_per_entity():
    """测试宽松策略允许同一实体参与多个映射"""
    a = make_alignment((1, 1, 0.9), (1, 2, 0.8), (2, 2, 0.7), (3, 2, 0.75))
    selected = Selector(0.5, "permissive").filter(a)
    # (1, 2) 是目标 2 的最佳映射，(1, 1) 是源 1 的最佳映射
    assert sorted(m.key for m in selected) == [(1, 1), (1, 2), (2, 2), (3, 2)]
    assert not selected.is_one_to_one()


def test_selector_permissive_drops_dominated():
    """测试宽松策略丢弃对源和目标都不是最佳的映射"""
    a = make_alignment((1, 1, 0.9), (2, 2, 0.9), (1, 2, 0.6))
    selected = Selector(0.5, SelectionType.PERMISSIVE).filter(a)
    assert sorted(m.key for m in selected) == [(1, 1), (2, 2)]


def test_selector_hybrid_keeps_high_confidence():
    """测试混合策略：高置信映射全部保留，其余严格选择"""
    a = make_alignment(
        (1, 1, 0.9), (1, 2, 0.8), (3, 3, 0.7), (3, 4, 0.65), (2, 3, 0.6)
    )
    selected = Selector(0.5, SelectionType.HYBRID).filter(a)
    assert sorted(m.key for m in selected) == [(1, 1), (1, 2), (3, 3)]


def test_selector_in_place(candidates):
    """测试原地过滤修改传入的对齐"""
    result = Selector(0.6).filter(candidates, in_place=True)
    assert result is candidates
    assert as_triples(candidates) == [(1, 1, 0.9), (2, 2, 0.65)]


def test_selector_support_validate():
    """测试支持对齐验证：有效分数来自支持对齐"""
    primary = make_alignment((1, 1, 0.9), (2, 2, 0.8), (3, 3, 0.4))
    support = make_alignment((1, 1, 0.3), (2, 2, 0.7), (3, 3, 0.95))
    selected = Selector(0.6, support=support).filter(primary)
    # 返回主对齐中的原始映射
    assert as_triples(selected) == [(2, 2, 0.8), (3, 3, 0.4)]


def test_selector_support_rescue():
    """测试支持对齐挽回低于阈值的映射"""
    primary = make_alignment((1, 1, 0.9), (2, 2, 0.4), (3, 3, 0.3))
    support = make_alignment((2, 2, 0.7))
    selected = Selector(0.6, support=support, support_rule=SupportRule.RESCUE).filter(
        primary
    )
    assert as_triples(selected) == [(1, 1, 0.9), (2, 2, 0.4)]


def test_selector_support_ranking_uses_support_scores():
    """测试验证规则下按支持分数排序决定冲突"""
    primary = make_alignment((1, 1, 0.9), (1, 2, 0.7))
    support = make_alignment((1, 1, 0.65), (1, 2, 0.85))
    selected = Selector(0.6, support=support).filter(primary)
    assert [m.key for m in selected] == [(1, 2)]


@pytest.mark.parametrize("threshold", [-0.1, 1.5])
def test_selector_rejects_bad_threshold(threshold):
    """测试阈值超出范围时报配置错误"""
    with pytest.raises(ConfigurationError):
        Selector(threshold)


def test_selector_rejects_unknown_policy():
    """测试未知策略报配置错误"""
    with pytest.raises(ConfigurationError):
        Selector(0.5, "greedy-ish")
