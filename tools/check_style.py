#!/usr/bin/env python3
"""Check for banned constructions in the cmdsig classifier.

The classifier is a pure function of argv and the flag registry. Modules
under cli/ and the classifier half of core/ must not do I/O.

    Construction          Reason                            Use instead
    --------------------  --------------------------------  --------------------------
    import os/sys/...     classifier must not touch the     cmdsig.cmdsig entry point
    from os import        process, files or network
    print(...), open(...) no output from the classifier     CommandPath.reason + log_signature
"""

import ast
import os
import sys

BANNED_MODULES = frozenset({"os", "sys", "subprocess", "socket", "structlog", "logging"})
BANNED_CALLS = frozenset({"print", "open", "input"})

# Modules allowed to do I/O
IO_MODULES = frozenset({"cmdsig.py", "config.py"})


def find_python_files(directory):
    """Find all classifier .py files recursively."""
    result = []
    for root, dirs, files in os.walk(directory):
        for f in files:
            if f.endswith(".py") and f not in IO_MODULES:
                result.append(os.path.join(root, f))
    result.sort()
    return result


def check_file(filepath):
    with open(filepath) as f:
        source = f.read()

    tree = ast.parse(source, filepath)
    errors = []

    for node in ast.walk(tree):
        lineno = getattr(node, "lineno", 0)

        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name.split(".")[0] in BANNED_MODULES:
                    errors.append((lineno, f"import {alias.name}: banned, classifier does no I/O"))

        if isinstance(node, ast.ImportFrom):
            if node.module and node.module.split(".")[0] in BANNED_MODULES:
                errors.append((lineno, f"from {node.module} import: banned, classifier does no I/O"))

        if isinstance(node, ast.Call) and isinstance(node.func, ast.Name):
            if node.func.id in BANNED_CALLS:
                errors.append((lineno, f"{node.func.id}(): banned, classifier does no I/O"))

    return errors


def main():
    src_dir = "src/cmdsig"
    if len(sys.argv) > 1:
        src_dir = sys.argv[1]

    if not os.path.isdir(src_dir):
        print(f"Directory not found: {src_dir}")
        sys.exit(1)

    files = find_python_files(src_dir)
    if not files:
        print(f"No Python files found in: {src_dir}")
        sys.exit(1)

    all_errors = []
    for filepath in files:
        try:
            errors = check_file(filepath)
            for lineno, description in errors:
                all_errors.append((filepath, lineno, description))
        except SyntaxError as e:
            print(f"Syntax error in {filepath}: {e}")
            sys.exit(1)

    if not all_errors:
        sys.exit(0)

    print(f"Found {len(all_errors)} banned construction(s):")
    for filepath, lineno, description in sorted(all_errors):
        print(f"  {filepath}:{lineno}: {description}")
    sys.exit(1)


if __name__ == "__main__":
    main()
