import sys

from toyl.cli import main

sys.exit(main())
