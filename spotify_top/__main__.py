import sys

from spotify_top.app import main

if __name__ == "__main__":
    sys.exit(main())
