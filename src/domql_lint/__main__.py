import sys

from domql_lint.cli import main

sys.exit(main())
