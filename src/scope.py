import logging
from typing import Dict, List, Optional

from code_generator import CodeGenerator
from my_types import Variable, VarType

logger = logging.getLogger(__name__)


class SymbolTable:
    """
    符号表 - 单一扁平命名空间。
    变量在第一次赋值时声明，类型以第一次为准；
    只有 for 循环的临时计数器会被移除。
    """

    def __init__(self, generator: Optional[CodeGenerator] = None):
        self.generator = generator if generator is not None else CodeGenerator()
        self.variables: Dict[str, Variable] = {}

    def declare(self, name: str, t: VarType) -> bool:
        """声明变量，已存在时不做任何事。返回是否真正插入"""
        if name in self.variables:
            return False
        variable = Variable(name, t)
        self.variables[name] = variable
        logger.debug("declared %r", variable)
        self.generator.declare_variable(variable)
        return True

    def lookup(self, name: str) -> Optional[Variable]:
        """查找变量，不存在返回 None"""
        return self.variables.get(name)

    def remove(self, name: str):
        """移除变量（for 循环临时计数器）"""
        if self.variables.pop(name, None) is not None:
            logger.debug("removed loop-local %s", name)

    def snapshot(self) -> List[Variable]:
        return list(self.variables.values())

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __len__(self) -> int:
        return len(self.variables)
