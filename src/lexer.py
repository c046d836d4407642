from typing import Iterable, List

from ply import lex

from my_types import Token, TokenKind

reserved = {
    'begin': 'BEGIN',
    'end': 'END',
    'if': 'IF',
    'then': 'THEN',
    'else': 'ELSE',
    'while': 'WHILE',
    'loop': 'LOOP',
    'call': 'CALL',
    'do': 'DO',
    'until': 'UNTIL',
    'for': 'FOR',
}

tokens = [
    'IDENT', 'NUMBER', 'STRING',
    'BECOMES', 'SEMICOLON', 'COMMA',
    'LPAREN', 'RPAREN',
    'PLUS', 'MINUS', 'TIMES', 'DIVIDE',
    'GT', 'GE', 'EQ', 'NE', 'LT', 'LE',
] + list(reserved.values())

t_BECOMES = r':='
t_SEMICOLON = r';'
t_COMMA = r','
t_LPAREN = r'\('
t_RPAREN = r'\)'

t_GE = r'>='
t_LE = r'<='
t_NE = r'!='
t_GT = r'>'
t_LT = r'<'
t_EQ = r'='

t_PLUS = r'\+'
t_MINUS = r'-'
t_TIMES = r'\*'
t_DIVIDE = r'/'

def t_STRING(t):
    r'"[^"\n]*"'
    t.value = t.value[1:-1]
    return t

def t_NUMBER(t):
    r'\d+(?:\.\d+)?'
    return t

def t_IDENT(t):
    r'[A-Za-z][A-Za-z0-9_]*'
    t.type = reserved.get(t.value, 'IDENT')
    return t

t_ignore = ' \t\r'

def t_newline(t):
    r'\n+'
    t.lexer.lineno += t.value.count('\n')

def t_error(t):
    # 非法字符作为单独的 token 交给语法分析器报错
    t.type = TokenKind.ILLEGAL.value
    t.value = t.value[0]
    t.lexer.skip(1)
    return t

lexer = lex.lex()


class TokenStream:
    """基于 ply 词法分析器的 token 源，输入结束后持续返回 EOF"""

    def __init__(self, source: str):
        self._lexer = lexer.clone()
        self._lexer.lineno = 1
        self._lexer.input(source)

    def next_token(self) -> Token:
        tok = self._lexer.token()
        if tok is None:
            return Token(TokenKind.EOF, '', self._lexer.lineno)
        return Token(TokenKind(tok.type), str(tok.value), tok.lineno)


class TokenList:
    """把现成的 token 序列包装成 token 源"""

    def __init__(self, items: Iterable[Token]):
        self._items = list(items)
        self._pos = 0

    def next_token(self) -> Token:
        if self._pos < len(self._items):
            tok = self._items[self._pos]
            self._pos += 1
            return tok
        line = self._items[-1].line if self._items else 1
        return Token(TokenKind.EOF, '', line)


def tokenize(source: str) -> List[Token]:
    """返回全部 token，末尾带一个 EOF"""
    stream = TokenStream(source)
    result = []
    while True:
        tok = stream.next_token()
        result.append(tok)
        if tok.kind is TokenKind.EOF:
            return result
