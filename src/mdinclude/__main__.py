import sys

from mdinclude.cli import main

sys.exit(main())
