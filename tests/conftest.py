import os
import sys


# Tests run from a plain checkout too: put src/ ahead of any installed copy
SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "src"))
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)
