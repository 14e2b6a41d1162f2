"""
测试公共工具
Shared Test Helpers
"""
import sys
from pathlib import Path

import pytest

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


class ScriptedRandom:
    """按预设脚本返回结果的随机源"""

    def __init__(self, floats=None, indices=None):
        self.floats = list(floats or [])
        self.indices = list(indices or [])
        self.calls = []

    def random(self):
        self.calls.append('random')
        return self.floats.pop(0)

    def choice(self, seq):
        self.calls.append('choice')
        return seq[self.indices.pop(0)]


@pytest.fixture
def scripted():
    """创建脚本化随机源的工厂"""
    return ScriptedRandom
