import os
import sys

# Repository root, so the tests run from a plain checkout too
here = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, os.path.abspath(os.path.join(here, "..")))
