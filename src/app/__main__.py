import sys

from src.app.cli import main

sys.exit(main())
