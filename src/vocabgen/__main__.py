"""Allow ``python -m vocabgen``."""

import sys

from vocabgen.main import main

if __name__ == "__main__":
    sys.exit(main())
