import sys

from lwtensor.demo import main

sys.exit(main())
