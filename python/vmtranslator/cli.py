# src/vmtranslator/cli.py
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .code_writer import CodeWriter
from .errors import VMTranslatorError


def default_output(inp: Path) -> Path:
    # Foo.vm -> Foo.asm ; dir/Prog -> dir/Prog/Prog.asm
    if inp.is_dir():
        return inp / f"{inp.resolve().name}.asm"
    return inp.with_suffix(".asm")


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="vmtranslator", description="VM code -> Hack assembly")
    p.add_argument("input", help="Input .vm file or directory of .vm files")
    p.add_argument("-o", "--asm", help="Path to output .asm file (default: next to input)")
    boot = p.add_mutually_exclusive_group()
    boot.add_argument("--bootstrap", dest="bootstrap", action="store_true", default=None,
                      help="Emit SP=256; call Sys.init 0 first (default for directories)")
    boot.add_argument("--no-bootstrap", dest="bootstrap", action="store_false",
                      help="Never emit the bootstrap code")
    args = p.parse_args(argv)

    inp = Path(args.input)
    if not inp.exists():
        print(f"[vmtranslator] ERROR: input not found: {inp}", file=sys.stderr)
        return 2

    asm_path = Path(args.asm) if args.asm else default_output(inp)
    bootstrap = args.bootstrap if args.bootstrap is not None else inp.is_dir()

    writer = CodeWriter()
    if bootstrap:
        writer.write_bootstrap()

    try:
        if inp.is_dir():
            modules = writer.write_directory(inp)
            if not modules:
                print(f"[vmtranslator] ERROR: no .vm files in {inp}", file=sys.stderr)
                return 2
        else:
            modules = [writer.write_module_from_file(inp)]
    except VMTranslatorError as e:
        print(f"[vmtranslator] ERROR: {e}", file=sys.stderr)
        return 3

    asm_path.parent.mkdir(parents=True, exist_ok=True)
    writer.save(asm_path)

    print(f"[vmtranslator] modules: {', '.join(modules)}")
    print(f"OK. asm_written={asm_path.resolve()} ({len(writer.p)} lines)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
