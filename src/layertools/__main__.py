import sys

from layertools.cli._dispatcher import main

sys.exit(main())
