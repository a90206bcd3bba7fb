"""
Entry point for `python -m bullet_pacer_qt`.

Logging is configured at the top of app_qt.py before Qt is imported; this
module simply delegates to app_qt.main().
"""

from bullet_pacer_qt.app_qt import main

if __name__ == "__main__":
    main()
