"""
Tests - 测试集合

测试文件:

1. test_alignment.py - 映射与对齐数据模型、TSV 读写
2. test_selection.py - 贪心选择与策略选择
3. test_interactive.py - 交互式选择（Oracle、预算、方差）
4. test_ensemble.py - 组合、参考匹配器与过滤器
5. test_pipeline.py - 流水线编排
6. test_config.py - 运行配置
7. test_cli.py - API 与命令行

运行所有测试:
  python -m pytest tests/ -v
"""
