import io
from typing import Iterable

from code_generator import GeneratorEvent, RecordingGenerator


class TreePrinter:
    """
    把 RecordingGenerator 记录的事件打印成缩进的语法结构树
    支持：
    - 变量声明信息显示 (show_types)
    - 终结符所在行号 (show_locations)
    - 彩色输出（可选）
    """

    def __init__(self, show_types=True, show_locations=False, use_colors=False, indent_size=2):
        self.show_types = show_types
        self.show_locations = show_locations
        self.use_colors = use_colors
        self.indent_size = indent_size
        self.output = io.StringIO()
        self.depth = 0

        # 颜色代码
        if use_colors:
            self.colors = {
                'type': '\033[36m',  # 青色 - 类型信息
                'node': '\033[33m',  # 黄色 - 结构名
                'value': '\033[32m',  # 绿色 - 终结符
                'comment': '\033[90m',  # 灰色 - 注释
                'error': '\033[31m',  # 红色 - 错误
                'reset': '\033[0m'
            }
        else:
            self.colors = {k: '' for k in ['type', 'node', 'value', 'comment', 'error', 'reset']}

    def print(self, events: Iterable[GeneratorEvent]) -> str:
        """打印事件序列并返回字符串"""
        self.output = io.StringIO()
        self.depth = 0
        for event in events:
            visitor = getattr(self, f'_visit_{event.kind}', self._visit_generic)
            visitor(event)
        return self.output.getvalue()

    def _line(self, text: str):
        self.output.write(" " * (self.depth * self.indent_size) + text + "\n")

    def _color(self, text: str, color: str) -> str:
        return f"{self.colors[color]}{text}{self.colors['reset']}"

    def _visit_generic(self, event: GeneratorEvent):
        self._line(self._color(repr(event), 'comment'))

    def _visit_enter(self, event: GeneratorEvent):
        self._line(self._color(event.name, 'node'))
        self.depth += 1

    def _visit_leave(self, event: GeneratorEvent):
        self.depth -= 1

    def _visit_terminal(self, event: GeneratorEvent):
        tok = event.token
        text = tok.kind.label
        if tok.text and tok.text != tok.kind.label.strip("'"):
            text += " " + self._color(tok.text, 'value')
        if self.show_locations:
            text += self._color(f" @{tok.line}", 'comment')
        self._line(text)

    def _visit_declare(self, event: GeneratorEvent):
        if self.show_types:
            self._line(self._color(f"/* declare {event.variable} */", 'type'))

    def _visit_error(self, event: GeneratorEvent):
        self._line(self._color(f"!! {event.message}", 'error'))

    def _visit_success(self, event: GeneratorEvent):
        pass


def print_tree(recorder: RecordingGenerator, show_types: bool = True,
               show_locations: bool = False, use_colors: bool = False) -> str:
    """
    便捷的结构树打印函数

    用法:
        recorder = RecordingGenerator()
        check(source, generator=recorder)
        print(print_tree(recorder))
    """
    printer = TreePrinter(show_types=show_types, show_locations=show_locations,
                          use_colors=use_colors)
    return printer.print(recorder.events)
