#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

"""Pytest configuration for scgi-run tests."""

import os
import sys

# Add the project root to sys.path so the tests run against the checkout
# without installing it, and so 'tests.support' can be imported.
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)
