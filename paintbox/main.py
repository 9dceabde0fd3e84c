import os
import sys

from PySide6.QtWidgets import QApplication

from paintbox.core.app import App
from paintbox.logging_config import configure_logging
from paintbox.ui.ui import MainWindow


def main():
    configure_logging(os.environ.get("PAINTBOX_LOG_LEVEL", "INFO"))
    q_app = QApplication(sys.argv)
    app = App()
    window = MainWindow(app)
    window.show()
    return q_app.exec()


if __name__ == "__main__":
    sys.exit(main())
