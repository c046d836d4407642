"""
Pytest configuration for tinyrd tests.
"""
import os
import sys

import pytest

# 源码是 src/ 下的顶层模块
_SRC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)

from analyzer import SyntaxAnalyzer
from code_generator import RecordingGenerator
from lexer import TokenStream


@pytest.fixture
def run():
    """分析源码，返回 (result, recorder, analyzer)"""
    def _run(source, source_name="test.txt"):
        recorder = RecordingGenerator()
        analyzer = SyntaxAnalyzer(TokenStream(source), source_name, recorder)
        result = analyzer.analyze()
        return result, recorder, analyzer
    return _run
