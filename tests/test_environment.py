"""
Environment check: the third-party stack imports and Qt runs headless.
"""
import sys


def test_python_version():
    assert sys.version_info >= (3, 10)


def test_pyqt5():
    from PyQt5 import QtCore
    assert QtCore.QT_VERSION_STR


def test_matplotlib_qt_backend():
    import matplotlib
    from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg  # noqa: F401
    assert matplotlib.__version__


def test_numpy_and_dotenv():
    import numpy
    import dotenv  # noqa: F401
    assert numpy.__version__
