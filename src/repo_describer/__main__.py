import sys

from repo_describer.cli import main

sys.exit(main())
