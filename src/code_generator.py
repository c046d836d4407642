import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

from my_types import Token, Variable


class CodeGenerator:
    """
    分析事件的接收者。语法分析器只负责推送事件，
    具体如何生成代码或打印由子类决定。默认实现全部为空操作。
    """

    def enter_construct(self, name: str):
        pass

    def leave_construct(self, name: str):
        pass

    def consume_terminal(self, token: Token):
        pass

    def declare_variable(self, variable: Variable):
        pass

    def report_error(self, token: Token, message: str):
        pass

    def report_success(self):
        pass


class TraceGenerator(CodeGenerator):
    """按 rggBEGIN / rggEND / rggTOKEN / rggDECL 格式输出事件轨迹"""

    def __init__(self, stream: Optional[TextIO] = None, indent_size: int = 2):
        self.stream = stream if stream is not None else sys.stdout
        self.indent_size = indent_size
        self.depth = 0

    def emit(self, line: str):
        self.stream.write(" " * (self.depth * self.indent_size) + line + "\n")

    def enter_construct(self, name: str):
        self.emit(f"rggBEGIN {name}")
        self.depth += 1

    def leave_construct(self, name: str):
        self.depth -= 1
        self.emit(f"rggEND {name}")

    def consume_terminal(self, token: Token):
        if token.text:
            self.emit(f"rggTOKEN {token.kind.label} {token.text}")
        else:
            self.emit(f"rggTOKEN {token.kind.label}")

    def declare_variable(self, variable: Variable):
        self.emit(f"rggDECL {variable.identifier} {variable.type}")

    def report_error(self, token: Token, message: str):
        self.depth = 0
        self.emit(f"rggERROR {message}")

    def report_success(self):
        self.depth = 0
        self.emit("rggSUCCESS")


@dataclass
class GeneratorEvent:
    """
    记录下来的一条事件：
    - kind: 'enter', 'leave', 'terminal', 'declare', 'error', 'success'
    - name: 语法结构名（enter/leave）
    - token: 终结符或出错位置（terminal/error）
    - variable: 新声明的变量（declare）
    - message: 错误信息（error）
    """
    kind: str
    name: Optional[str] = None
    token: Optional[Token] = None
    variable: Optional[Variable] = None
    message: Optional[str] = None

    def __repr__(self):
        if self.kind in ('enter', 'leave'):
            return f"{self.kind}({self.name})"
        if self.kind == 'terminal':
            return f"terminal({self.token.kind.name} {self.token.text!r})"
        if self.kind == 'declare':
            return f"declare({self.variable})"
        if self.kind == 'error':
            return f"error({self.message})"
        return self.kind


class RecordingGenerator(CodeGenerator):
    """把事件按顺序保存下来，供测试和 TreePrinter 使用"""

    def __init__(self):
        self.events: List[GeneratorEvent] = []

    def enter_construct(self, name: str):
        self.events.append(GeneratorEvent('enter', name=name))

    def leave_construct(self, name: str):
        self.events.append(GeneratorEvent('leave', name=name))

    def consume_terminal(self, token: Token):
        self.events.append(GeneratorEvent('terminal', token=token))

    def declare_variable(self, variable: Variable):
        self.events.append(GeneratorEvent('declare', variable=variable))

    def report_error(self, token: Token, message: str):
        self.events.append(GeneratorEvent('error', token=token, message=message))

    def report_success(self):
        self.events.append(GeneratorEvent('success'))

    def of_kind(self, kind: str) -> List[GeneratorEvent]:
        return [e for e in self.events if e.kind == kind]

    def constructs(self) -> List[str]:
        """按进入顺序列出所有语法结构名"""
        return [e.name for e in self.events if e.kind == 'enter']

    def is_well_nested(self) -> bool:
        """检查 enter/leave 是否严格成对嵌套"""
        stack = []
        for e in self.events:
            if e.kind == 'enter':
                stack.append(e.name)
            elif e.kind == 'leave':
                if not stack or stack.pop() != e.name:
                    return False
        return not stack


class MulticastGenerator(CodeGenerator):
    """把同一事件转发给多个接收者"""

    def __init__(self, *targets: CodeGenerator):
        self.targets = list(targets)

    def enter_construct(self, name: str):
        for t in self.targets:
            t.enter_construct(name)

    def leave_construct(self, name: str):
        for t in self.targets:
            t.leave_construct(name)

    def consume_terminal(self, token: Token):
        for t in self.targets:
            t.consume_terminal(token)

    def declare_variable(self, variable: Variable):
        for t in self.targets:
            t.declare_variable(variable)

    def report_error(self, token: Token, message: str):
        for t in self.targets:
            t.report_error(token, message)

    def report_success(self):
        for t in self.targets:
            t.report_success()
