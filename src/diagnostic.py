from dataclasses import dataclass
from typing import Optional, Sequence

from code_generator import CodeGenerator
from my_types import Token, TokenKind


class CompilationError(Exception):
    """分析中止信号，携带错误信息和行号"""

    def __init__(self, message: str, line: int):
        super().__init__(message)
        self.message = message
        self.line = line

    def to_diagnostic(self) -> 'Diagnostic':
        return Diagnostic(self.message, self.line)


class GrammarError(CompilationError):
    """语法错误：期望的 token 与实际不符"""

    def __init__(self, message: str, line: int, expected: Sequence[TokenKind], found: TokenKind):
        super().__init__(message, line)
        self.expected = tuple(expected)
        self.found = found


class UndeclaredVariableError(CompilationError):
    """因子位置使用了未赋值过的变量"""

    def __init__(self, message: str, line: int, identifier: str):
        super().__init__(message, line)
        self.identifier = identifier


class IncompatibleTypeError(CompilationError):
    """对 String 变量使用了 '-'、'*' 或 '/'"""

    def __init__(self, message: str, line: int, identifier: str, operator: TokenKind):
        super().__init__(message, line)
        self.identifier = identifier
        self.operator = operator


@dataclass(frozen=True)
class Diagnostic:
    message: str
    line: int

    def __str__(self):
        return self.message


class DiagnosticReporter:
    """格式化带源码位置的错误信息，通知 generator 后抛出中止信号"""

    def __init__(self, source_name: str, generator: Optional[CodeGenerator] = None):
        self.source_name = source_name
        self.generator = generator if generator is not None else CodeGenerator()

    def position(self, token: Token) -> str:
        return f"line {token.line} in {self.source_name}"

    def report(self, token: Token, explanation: str, error_cls=CompilationError, **details):
        """
        所有错误的唯一出口：加上位置前缀，通知 generator，然后抛出 error_cls。
        details 原样传给异常的构造函数。
        """
        message = f"{self.position(token)}: {explanation}"
        error = error_cls(message, token.line, **details)
        self.generator.report_error(token, message)
        raise error

    def expected(self, token: Token, *kinds: TokenKind):
        names = "/".join(k.label for k in kinds)
        self.report(token, f"Expected token(s) {names} but found {token.kind.label}.",
                    GrammarError, expected=kinds, found=token.kind)

    def undeclared(self, token: Token):
        self.report(token, f"Variable {token.text} not defined",
                    UndeclaredVariableError, identifier=token.text)

    def incompatible(self, token: Token, identifier: str):
        self.report(token, f"Invalid operation {token.kind.label} on string variable: {identifier}",
                    IncompatibleTypeError, identifier=identifier, operator=token.kind)
