import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

from analyzer import AnalysisResult, SyntaxAnalyzer
from code_generator import MulticastGenerator, RecordingGenerator, TraceGenerator
from lexer import TokenStream
from visitors import TreePrinter

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "source_name": None,   # 默认使用文件名
    "trace": False,        # 输出 rgg 事件轨迹
    "tree": False,         # 输出语法结构树
    "color": False,
    "show_lines": False,
    "output": None,        # 默认 sys.stdout
}


class SourceChecker:
    """读取源文件，执行词法和语法/语义分析"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = dict(DEFAULT_CONFIG)
        self.config.update(config or {})

        self.trace = bool(self.config["trace"])
        self.tree = bool(self.config["tree"])
        self.color = bool(self.config["color"])
        self.show_lines = bool(self.config["show_lines"])

        self.recorder: Optional[RecordingGenerator] = None
        self.result: Optional[AnalysisResult] = None

    @property
    def output(self):
        return self.config["output"] or sys.stdout

    def check_file(self, path: Union[str, Path]) -> AnalysisResult:
        """分析文件，读取失败时 OSError 直接抛出"""
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            code = f.read()
        return self.check_source(code, self.config["source_name"] or path.name)

    def check_source(self, code: str, source_name: Optional[str] = None) -> AnalysisResult:
        name = source_name or self.config["source_name"] or "<input>"
        logger.info("checking %s", name)

        self.recorder = RecordingGenerator()
        generator = self.recorder
        if self.trace:
            generator = MulticastGenerator(TraceGenerator(self.output), self.recorder)

        analyzer = SyntaxAnalyzer(TokenStream(code), name, generator)
        self.result = analyzer.analyze()

        if self.tree:
            printer = TreePrinter(show_locations=self.show_lines, use_colors=self.color)
            self.output.write(printer.print(self.recorder.events))

        if self.result.ok:
            logger.info("%s: ok, %d variable(s)", name, len(self.result.variables))
        else:
            logger.info("%s: failed at line %d", name, self.result.diagnostic.line)
        return self.result


def debug_enabled() -> bool:
    return bool(os.environ.get("TINYRD_DEBUG"))
