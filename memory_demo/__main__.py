import sys

from memory_demo.cli import main

sys.exit(main())
