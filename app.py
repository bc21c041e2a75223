import sys
from PySide6.QtWidgets import QApplication
from ui.tray import TrayController

def main():
    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)
    tray = TrayController()
    app.aboutToQuit.connect(tray.stop)
    tray.start()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
