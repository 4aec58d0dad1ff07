#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

import ast
import os

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def setup_assignments():
    with open(os.path.join(PROJECT_ROOT, "setup.py")) as f:
        tree = ast.parse(f.read())
    found = {}
    for node in tree.body:
        if isinstance(node, ast.Assign):
            for target in node.targets:
                if isinstance(target, ast.Name):
                    found[target.id] = node.value
    return found


def test_no_runtime_requirements():
    # scgirun only uses the standard library at runtime
    value = setup_assignments()["install_requires"]
    assert isinstance(value, ast.List)
    assert value.elts == []
