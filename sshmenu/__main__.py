import sys

from .sshmenu import main

sys.exit(main())
