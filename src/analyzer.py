import logging
from dataclasses import dataclass, field
from typing import List, Optional

from code_generator import CodeGenerator
from diagnostic import CompilationError, Diagnostic, DiagnosticReporter
from lexer import TokenStream
from my_types import CONDITIONAL_OPERATORS, Token, TokenKind, Variable, VarType
from scope import SymbolTable

logger = logging.getLogger(__name__)

K = TokenKind

STATEMENT_STARTS = (K.IDENT, K.IF, K.WHILE, K.CALL, K.DO, K.FOR)
CONDITION_OPERANDS = (K.IDENT, K.NUMBER, K.STRING)


@dataclass
class AnalysisResult:
    """一次分析的结果：成功时 diagnostic 为 None"""
    diagnostic: Optional[Diagnostic] = None
    variables: List[Variable] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


class SyntaxAnalyzer:
    """
    递归下降语法/语义分析器（LL(1)）。
    每个非终结符对应一个方法，进入和离开时通知 generator；
    遇到第一个错误即抛出 CompilationError 中止整个分析。
    """

    def __init__(self, tokens, source_name: str = "<input>",
                 generator: Optional[CodeGenerator] = None):
        self.tokens = tokens
        self.source_name = source_name
        self.generator = generator if generator is not None else CodeGenerator()
        self.symbols = SymbolTable(self.generator)
        self.reporter = DiagnosticReporter(source_name, self.generator)
        self.next_token: Optional[Token] = None

        self._statements = {
            K.IDENT: self._assignment_statement,
            K.IF: self._if_statement,
            K.WHILE: self._while_statement,
            K.CALL: self._procedure_statement,
            K.DO: self._until_statement,
            K.FOR: self._for_statement,
        }

    def analyze(self) -> AnalysisResult:
        """分析主入口，错误转换为 Diagnostic 返回"""
        try:
            try:
                self.parse()
            except RecursionError:
                # 括号和语句块的嵌套仍是递归的，过深时作为普通错误报告
                self.reporter.report(self.next_token, "Nesting too deep")
        except CompilationError as e:
            logger.debug("analysis of %s aborted at line %d", self.source_name, e.line)
            return AnalysisResult(e.to_diagnostic(), self.symbols.snapshot())
        return AnalysisResult(None, self.symbols.snapshot())

    def parse(self):
        """与 analyze 相同，但错误直接抛出"""
        logger.debug("analysing %s", self.source_name)
        self.next_token = self.tokens.next_token()
        self._statement_part()
        self.accept_terminal(K.EOF)
        self.generator.report_success()
        logger.debug("analysis of %s finished, %d variable(s)", self.source_name, len(self.symbols))

    def accept_terminal(self, kind: TokenKind):
        """校验向前看 token 的种类，通知 generator 并读入下一个 token"""
        if self.next_token.kind is not kind:
            self.reporter.expected(self.next_token, kind)
        self.generator.consume_terminal(self.next_token)
        self.next_token = self.tokens.next_token()

    # ==================== 语句 ====================

    def _statement_part(self):
        self.generator.enter_construct("StatementPart")
        self.accept_terminal(K.BEGIN)
        self._statement_list()
        self.accept_terminal(K.END)
        self.generator.leave_construct("StatementPart")

    def _statement_list(self):
        # 右递归展开为循环，事件顺序与递归版本一致
        depth = 0
        while True:
            self.generator.enter_construct("StatementList")
            depth += 1
            self._statement()
            if self.next_token.kind is not K.SEMICOLON:
                break
            self.accept_terminal(K.SEMICOLON)
        for _ in range(depth):
            self.generator.leave_construct("StatementList")

    def _statement(self):
        handler = self._statements.get(self.next_token.kind)
        if handler is None:
            self.reporter.expected(self.next_token, *STATEMENT_STARTS)
        self.generator.enter_construct("Statement")
        handler()
        self.generator.leave_construct("Statement")

    def _assignment_statement(self):
        self.generator.enter_construct("AssignmentStatement")
        name = self.next_token.text
        self.accept_terminal(K.IDENT)
        self.accept_terminal(K.BECOMES)

        if self.next_token.kind is K.STRING:
            self.accept_terminal(K.STRING)
            self.symbols.declare(name, VarType.STRING)
        else:
            self._expression()
            self.symbols.declare(name, VarType.NUMBER)

        self.generator.leave_construct("AssignmentStatement")

    def _if_statement(self):
        self.generator.enter_construct("IfStatement")
        self.accept_terminal(K.IF)
        self._condition()
        self.accept_terminal(K.THEN)
        self._statement_list()
        if self.next_token.kind is K.ELSE:
            self.accept_terminal(K.ELSE)
            self._statement_list()
        self.accept_terminal(K.END)
        self.accept_terminal(K.IF)
        self.generator.leave_construct("IfStatement")

    def _while_statement(self):
        self.generator.enter_construct("WhileStatement")
        self.accept_terminal(K.WHILE)
        self._condition()
        self.accept_terminal(K.LOOP)
        self._statement_list()
        self.accept_terminal(K.END)
        self.accept_terminal(K.LOOP)
        self.generator.leave_construct("WhileStatement")

    def _procedure_statement(self):
        self.generator.enter_construct("ProcedureStatement")
        self.accept_terminal(K.CALL)
        self.accept_terminal(K.IDENT)
        self.accept_terminal(K.LPAREN)
        self._argument_list()
        self.accept_terminal(K.RPAREN)
        self.generator.leave_construct("ProcedureStatement")

    def _until_statement(self):
        self.generator.enter_construct("UntilStatement")
        self.accept_terminal(K.DO)
        self._statement_list()
        self.accept_terminal(K.UNTIL)
        self._condition()
        self.generator.leave_construct("UntilStatement")

    def _for_statement(self):
        self.generator.enter_construct("ForStatement")
        self.accept_terminal(K.FOR)
        self.accept_terminal(K.LPAREN)

        # 循环前不存在的计数器只在循环内有效
        counter = self.next_token.text
        fresh = self.symbols.lookup(counter) is None

        self._assignment_statement()
        self.accept_terminal(K.SEMICOLON)
        self._condition()
        self.accept_terminal(K.SEMICOLON)
        self._assignment_statement()
        self.accept_terminal(K.RPAREN)
        self.accept_terminal(K.DO)
        self._statement_list()
        self.accept_terminal(K.END)
        self.accept_terminal(K.LOOP)

        if fresh:
            self.symbols.remove(counter)
        self.generator.leave_construct("ForStatement")

    def _argument_list(self):
        depth = 0
        while True:
            self.generator.enter_construct("ArgumentList")
            depth += 1
            self.accept_terminal(K.IDENT)
            if self.next_token.kind is not K.COMMA:
                break
            self.accept_terminal(K.COMMA)
        for _ in range(depth):
            self.generator.leave_construct("ArgumentList")

    # ==================== 条件 ====================

    def _condition(self):
        self.generator.enter_construct("Condition")
        self.accept_terminal(K.IDENT)
        self._conditional_operator()
        if self.next_token.kind not in CONDITION_OPERANDS:
            self.reporter.expected(self.next_token, *CONDITION_OPERANDS)
        self.accept_terminal(self.next_token.kind)
        self.generator.leave_construct("Condition")

    def _conditional_operator(self):
        kind = self.next_token.kind
        if kind not in CONDITIONAL_OPERATORS:
            self.reporter.expected(self.next_token, *CONDITIONAL_OPERATORS)
        self.generator.enter_construct("ConditionalOperator")
        self.accept_terminal(kind)
        self.generator.leave_construct("ConditionalOperator")

    # ==================== 表达式 ====================

    def _operand(self) -> Optional[Variable]:
        """规则入口处向前看的标识符对应的变量，用于类型检查"""
        if self.next_token.kind is K.IDENT:
            return self.symbols.lookup(self.next_token.text)
        return None

    def _check_operand(self, operand: Optional[Variable]):
        if operand is not None and operand.is_string():
            self.reporter.incompatible(self.next_token, operand.identifier)

    def _expression(self):
        # '+' 对任何类型都允许，'-' 不能用于 String 变量
        depth = 0
        while True:
            self.generator.enter_construct("Expression")
            depth += 1
            operand = self._operand()
            self._term()
            kind = self.next_token.kind
            if kind is K.MINUS:
                self._check_operand(operand)
            elif kind is not K.PLUS:
                break
            self.accept_terminal(kind)
        for _ in range(depth):
            self.generator.leave_construct("Expression")

    def _term(self):
        depth = 0
        while True:
            self.generator.enter_construct("Term")
            depth += 1
            operand = self._operand()
            self._factor()
            kind = self.next_token.kind
            if kind not in (K.TIMES, K.DIVIDE):
                break
            self._check_operand(operand)
            self.accept_terminal(kind)
        for _ in range(depth):
            self.generator.leave_construct("Term")

    def _factor(self):
        kind = self.next_token.kind
        if kind is K.IDENT:
            self.generator.enter_construct("Factor")
            if self.symbols.lookup(self.next_token.text) is None:
                self.reporter.undeclared(self.next_token)
            self.accept_terminal(K.IDENT)
        elif kind is K.NUMBER:
            self.generator.enter_construct("Factor")
            self.accept_terminal(K.NUMBER)
        elif kind is K.LPAREN:
            self.generator.enter_construct("Factor")
            self.accept_terminal(K.LPAREN)
            self._expression()
            self.accept_terminal(K.RPAREN)
        else:
            self.reporter.expected(self.next_token, K.IDENT, K.NUMBER, K.LPAREN)
        self.generator.leave_construct("Factor")


def check(source: str, source_name: str = "<input>",
          generator: Optional[CodeGenerator] = None) -> AnalysisResult:
    """对源码字符串做完整分析"""
    return SyntaxAnalyzer(TokenStream(source), source_name, generator).analyze()
