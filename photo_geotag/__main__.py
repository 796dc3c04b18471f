import sys

from photo_geotag.cli import main

sys.exit(main())
