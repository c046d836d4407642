from dataclasses import dataclass
from enum import Enum


class VarType(Enum):
    """变量类型：语言只有 Number 和 String 两种基础类型"""
    NUMBER = 'Number'
    STRING = 'String'

    def __str__(self):
        return self.value


@dataclass
class Variable:
    """
    变量：
    - identifier: 变量名
    - type: 首次赋值时推断出的类型，之后不再改变
    """
    identifier: str
    type: VarType

    def __repr__(self):
        return f"{self.identifier}: {self.type}"

    def is_string(self) -> bool:
        return self.type is VarType.STRING


class TokenKind(Enum):
    """
    词法单元种类，value 与 ply 的 token 类型名一致。
    label 用于错误信息中的显示名。
    """
    IDENT = 'IDENT'
    NUMBER = 'NUMBER'
    STRING = 'STRING'

    BEGIN = 'BEGIN'
    END = 'END'
    IF = 'IF'
    THEN = 'THEN'
    ELSE = 'ELSE'
    WHILE = 'WHILE'
    LOOP = 'LOOP'
    CALL = 'CALL'
    DO = 'DO'
    UNTIL = 'UNTIL'
    FOR = 'FOR'

    BECOMES = 'BECOMES'
    SEMICOLON = 'SEMICOLON'
    COMMA = 'COMMA'
    LPAREN = 'LPAREN'
    RPAREN = 'RPAREN'
    PLUS = 'PLUS'
    MINUS = 'MINUS'
    TIMES = 'TIMES'
    DIVIDE = 'DIVIDE'
    GT = 'GT'
    GE = 'GE'
    EQ = 'EQ'
    NE = 'NE'
    LT = 'LT'
    LE = 'LE'

    # 由词法分析器产生，不属于文法
    EOF = 'EOF'
    ILLEGAL = 'ILLEGAL'

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]

    def __str__(self):
        return self.label


_KIND_LABELS = {
    TokenKind.IDENT: 'identifier',
    TokenKind.NUMBER: 'number constant',
    TokenKind.STRING: 'string constant',
    TokenKind.BEGIN: "'begin'",
    TokenKind.END: "'end'",
    TokenKind.IF: "'if'",
    TokenKind.THEN: "'then'",
    TokenKind.ELSE: "'else'",
    TokenKind.WHILE: "'while'",
    TokenKind.LOOP: "'loop'",
    TokenKind.CALL: "'call'",
    TokenKind.DO: "'do'",
    TokenKind.UNTIL: "'until'",
    TokenKind.FOR: "'for'",
    TokenKind.BECOMES: "':='",
    TokenKind.SEMICOLON: "';'",
    TokenKind.COMMA: "','",
    TokenKind.LPAREN: "'('",
    TokenKind.RPAREN: "')'",
    TokenKind.PLUS: "'+'",
    TokenKind.MINUS: "'-'",
    TokenKind.TIMES: "'*'",
    TokenKind.DIVIDE: "'/'",
    TokenKind.GT: "'>'",
    TokenKind.GE: "'>='",
    TokenKind.EQ: "'='",
    TokenKind.NE: "'!='",
    TokenKind.LT: "'<'",
    TokenKind.LE: "'<='",
    TokenKind.EOF: 'end of file',
    TokenKind.ILLEGAL: 'illegal character',
}


@dataclass(frozen=True)
class Token:
    """词法单元：种类、原文、行号。创建后不可变"""
    kind: TokenKind
    text: str
    line: int

    def __repr__(self):
        return f"Token({self.kind.name}, {self.text!r}, line={self.line})"


# 条件运算符
CONDITIONAL_OPERATORS = (
    TokenKind.GT, TokenKind.GE, TokenKind.EQ,
    TokenKind.NE, TokenKind.LT, TokenKind.LE,
)
