"""
Allow running lwm2mctl as a module: python -m lwm2m_objects.cli
"""

import sys
from .lwm2mctl import main

if __name__ == "__main__":
    sys.exit(main())
