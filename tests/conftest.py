import logging
import os

import pytest

# 화면 없이 Qt 위젯을 만든다
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


@pytest.fixture(scope='session')
def qapp():
    from PyQt5.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def clean_logger():
    """setup_logger 가 새로 핸들러를 붙일 수 있도록 'calculator' 로거를 비운다."""
    logger = logging.getLogger('calculator')
    saved_handlers = logger.handlers[:]
    saved_level = logger.level
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)
