#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
tinyrd 命令行语法/语义检查器
用法: tinyrd <源文件路径> [模式(默认 quiet)]

示例:
    tinyrd examples/loop.txt
    tinyrd examples/loop.txt trace
    python3 tinyrd.py prog.txt tree
"""

import logging
import os
import sys
from pathlib import Path

# 确保能导入同级目录的模块
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from driver import SourceChecker, debug_enabled

MODES = ("quiet", "trace", "tree")


def print_usage():
    print(__doc__)
    print("\n参数说明:")
    print("  source   - 源文件路径")
    print("  mode     - 输出模式 (可选, 默认 quiet)")
    print("             quiet: 只输出结果")
    print("             trace: 输出 rggBEGIN/rggEND/rggTOKEN/rggDECL 事件轨迹")
    print("             tree:  输出语法结构树")


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    logging.basicConfig(
        level=logging.DEBUG if debug_enabled() else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # 参数检查
    if not args or len(args) > 2:
        print_usage()
        return 1

    source_path = Path(args[0])
    mode = args[1] if len(args) > 1 else "quiet"

    if mode not in MODES:
        print(f"✗ 错误: 未知模式: {mode}")
        print_usage()
        return 1

    if not source_path.is_file():
        print(f"✗ 错误: 源文件不存在: {source_path}")
        return 1

    config = {
        "source_name": source_path.name,
        "trace": mode == "trace",
        "tree": mode == "tree",
        "color": sys.stdout.isatty(),
        "show_lines": debug_enabled(),
    }

    checker = SourceChecker(config)
    try:
        result = checker.check_file(source_path)
    except OSError as e:
        print(f"✗ 错误: 无法读取源文件: {e}")
        return 1
    except Exception as e:
        print(f"\n✗ 分析器内部错误!")
        print(f"  错误: {str(e)}")

        # 调试模式显示堆栈
        if debug_enabled():
            import traceback
            traceback.print_exc()
        return 1

    if not result.ok:
        print(f"\n✗ 分析失败!")
        print(f"  {result.diagnostic.message}")
        return 1

    print(f"\n✓ 分析成功!")
    if result.variables:
        print(f"  变量: " + ", ".join(repr(v) for v in result.variables))
    return 0


if __name__ == "__main__":
    sys.exit(main())
