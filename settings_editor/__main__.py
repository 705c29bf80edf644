import sys

from settings_editor.cli import main

if __name__ == '__main__':
    sys.exit(main())
