"""Test configuration for pytest.

Ensure the repository root is on sys.path so tests can import the `tracesim`
package without installing it, and provide a helper to write small traces.
"""
import os
import sys

import pytest

# Compute project root: two directories above this file (tracesim/tests -> tracesim -> project root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


# the small trace from the CS:APP cache lab handout
YI_TRACE = """\
 L 10,1
 M 20,1
 L 22,1
 S 18,1
 L 110,1
 L 210,1
 M 12,1
"""


@pytest.fixture
def write_trace(tmp_path):
    def _write(text, name='test.trace'):
        p = tmp_path / name
        p.write_text(text)
        return str(p)
    return _write


@pytest.fixture
def yi_trace(write_trace):
    return write_trace(YI_TRACE, 'yi.trace')
