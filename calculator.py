# calculator.py
# Python 3.x, PyQt5
# PEP 8 준수, 문자열은 기본적으로 ' ' 사용

from decimal import (
    Decimal,
    getcontext,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import NamedTuple, Optional
import argparse
import logging
import re
import sys

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QApplication,
    QWidget,
    QGridLayout,
    QVBoxLayout,
    QLabel,
    QPushButton,
    QLineEdit,
)

logger = logging.getLogger('calculator')

ERROR = 'Error'

HAPPY = 'happy'
NEUTRAL = 'neutral'
SAD = 'sad'
EXCITED = 'excited'

BASIC = 'basic'
SCIENTIFIC = 'scientific'

DEG = 'deg'
RAD = 'rad'

EMOTION_EMOJI = {
    HAPPY: '😊',
    EXCITED: '🎉',
    SAD: '😢',
    NEUTRAL: '😐',
}

# 내부 연산자 -> 화면 기호
OPERATOR_LABELS = {'+': '+', '-': '−', '*': '×', '/': '÷'}

_GROUPING = re.compile(r'\B(?=(\d{3})+(?!\d))')


class CalculatorState(NamedTuple):
    """화면 렌더링에 쓰이는 계산기 상태. 연산마다 통째로 교체된다."""

    display: str = '0'
    previous_value: str = ''
    operation: Optional[str] = None
    emotion: str = NEUTRAL
    mode: str = BASIC
    angle_unit: str = DEG
    memory: str = '0'


def format_number(text: str) -> str:
    """정수부에 세 자리마다 ',' 를 넣는다. 소수부/지수부는 그대로 둔다."""
    if text == ERROR:
        return text
    sign = '-' if text.startswith('-') else ''
    mantissa, e, exponent = text[len(sign):].partition('e')
    integer, dot, fraction = mantissa.partition('.')
    return sign + _GROUPING.sub(',', integer) + dot + fraction + e + exponent


def unformat_number(text: str) -> str:
    return text.replace(',', '')


def to_decimal(text: str) -> Decimal:
    # 'Error' 등 숫자가 아닌 문자열은 InvalidOperation
    return Decimal(unformat_number(text))


def number_to_text(value: Decimal) -> str:
    """JS Number.toString 과 같은 모양으로 출력한다: 5, 0.25, 1.5e+21"""
    if not value.is_finite():
        raise InvalidOperation
    if value == 0:
        return '0'
    value = value.normalize()
    exp = value.adjusted()
    if -7 <= exp < 21:
        return format(value, 'f')
    mantissa = format(value.scaleb(-exp).normalize(), 'f')
    return '{}e{}{}'.format(mantissa, '+' if exp > 0 else '-', abs(exp))


def get_emotion(value) -> str:
    # 경계값 100, 1000 은 모두 neutral
    if value > 1000:
        return EXCITED
    if 100 < value < 1000:
        return HAPPY
    if value < 0:
        return SAD
    return NEUTRAL


class Calculator:
    """연산 엔진: 상태와 사칙연산/부호/퍼센트/= 처리"""

    MAX_DIGITS = 16  # 입력 자릿수 제한(부호, 소수점 포함)

    def __init__(self, state: Optional[CalculatorState] = None) -> None:
        # Decimal 전역 컨텍스트: double 범위를 넘으면 Overflow
        ctx = getcontext()
        ctx.prec = 28
        ctx.Emax = 308

        self._state = state if state is not None else CalculatorState()

    @property
    def state(self) -> CalculatorState:
        return self._state

    # 사칙연산
    def add(self, a: Decimal, b: Decimal) -> Decimal:
        return a + b

    def subtract(self, a: Decimal, b: Decimal) -> Decimal:
        return a - b

    def multiply(self, a: Decimal, b: Decimal) -> Decimal:
        return a * b

    def divide(self, a: Decimal, b: Decimal) -> Decimal:
        # 0 나누기는 DivisionByZero, 0/0 은 InvalidOperation
        return a / b

    # 입력
    def clear(self) -> CalculatorState:
        return self._publish(
            display='0',
            previous_value='',
            operation=None,
            emotion=NEUTRAL,
        )

    def input_digit(self, d: str) -> CalculatorState:
        if len(d) != 1 or d not in '0123456789':
            raise ValueError('not a digit: {!r}'.format(d))
        cur = unformat_number(self._state.display)
        # 지수 표기 결과 뒤에는 이어 쓰지 않고 새로 시작한다
        if cur in ('0', ERROR) or 'e' in cur:
            new = d
        elif len(cur) >= self.MAX_DIGITS:
            return self._state
        else:
            new = cur + d
        return self._publish(display=format_number(new), emotion=NEUTRAL)

    def input_dot(self) -> CalculatorState:
        cur = unformat_number(self._state.display)
        if cur == ERROR:
            cur = '0'
        elif '.' in cur or 'e' in cur or len(cur) >= self.MAX_DIGITS:
            return self._state
        return self._publish(display=format_number(cur + '.'), emotion=NEUTRAL)

    def backspace(self) -> CalculatorState:
        cur = unformat_number(self._state.display)
        if cur == ERROR:
            new = '0'
        else:
            # 지수 표기의 꼬리('1e+')나 부호만 남으면 함께 지운다
            new = cur[:-1].rstrip('e+-') or '0'
        return self._publish(display=format_number(new), emotion=NEUTRAL)

    def negative_positive(self) -> CalculatorState:
        cur = unformat_number(self._state.display)
        if cur in ('0', ERROR):
            return self._state
        if not cur.startswith('-') and len(cur) >= self.MAX_DIGITS:
            return self._state
        new = cur[1:] if cur.startswith('-') else '-' + cur
        return self._publish(display=format_number(new))

    # 연산
    def set_operator(self, op: str) -> CalculatorState:
        """op 는 내부 기호('+','-','*','/') 또는 UI 기호('+','−','×','÷')"""
        internal = self._to_internal_op(op)
        if self._state.display == ERROR:
            return self._state
        # 대기 중인 연산은 계산하지 않고 버린다
        return self._publish(
            previous_value=self._state.display,
            operation=internal,
            display='0',
            emotion=NEUTRAL,
        )

    def equal(self) -> CalculatorState:
        state = self._state
        if state.operation is None:
            return state
        try:
            a = to_decimal(state.previous_value)
            b = to_decimal(state.display)
            result = self._round_result(self._apply_op(a, b, state.operation))
        except (DivisionByZero, Overflow, InvalidOperation):
            logger.warning('%s %s %s -> %s', state.previous_value,
                           state.operation, state.display, ERROR)
            return self._set_error(previous_value='', operation=None)

        logger.debug('%s %s %s = %s', a, state.operation, b, result)
        return self._publish(
            display=format_number(number_to_text(result)),
            previous_value='',
            operation=None,
            emotion=get_emotion(result),
        )

    def percent(self) -> CalculatorState:
        state = self._state
        try:
            x = to_decimal(state.display)
            if state.operation is not None:
                # 이항 문맥: prev * x / 100, 대기 연산은 유지
                x = to_decimal(state.previous_value) * x / Decimal('100')
            else:
                # 단항 문맥: x / 100
                x = x / Decimal('100')
            text = number_to_text(self._round_result(x))
        except (DivisionByZero, Overflow, InvalidOperation):
            return self._set_error()
        return self._publish(display=format_number(text))

    # 메모리(mc, m+, m-, mr)
    def memory_clear(self) -> CalculatorState:
        return self._publish(memory='0')

    def memory_add(self) -> CalculatorState:
        return self._update_memory(self.add)

    def memory_subtract(self) -> CalculatorState:
        return self._update_memory(self.subtract)

    def memory_recall(self) -> CalculatorState:
        return self._publish(
            display=format_number(self._state.memory),
            emotion=NEUTRAL,
        )

    # 키보드
    def handle_key(self, key: str, is_repeat: bool = False) -> bool:
        """키 이름을 연산으로 변환해 실행한다. 처리했으면 True."""
        if is_repeat:
            return False
        binding = KEY_BINDINGS.get(key)
        if binding is None:
            return False
        name, args = binding
        getattr(self, name)(*args)
        return True

    # 내부 유틸
    def _publish(self, **changes) -> CalculatorState:
        self._state = self._state._replace(**changes)
        return self._state

    def _set_error(self, **changes) -> CalculatorState:
        return self._publish(display=ERROR, emotion=SAD, **changes)

    def _apply_op(self, a: Decimal, b: Decimal, op: str) -> Decimal:
        if op == '+':
            return self.add(a, b)
        if op == '-':
            return self.subtract(a, b)
        if op == '*':
            return self.multiply(a, b)
        if op == '/':
            return self.divide(a, b)
        raise ValueError('unknown operator: {!r}'.format(op))

    def _to_internal_op(self, ui_op: str) -> str:
        mapping = {'+': '+', '−': '-', '×': '*', '÷': '/'}
        internal = mapping.get(ui_op, ui_op)
        if internal not in OPERATOR_LABELS:
            raise ValueError('unknown operator: {!r}'.format(ui_op))
        return internal

    def _round_result(self, value: Decimal) -> Decimal:
        # 표시 문자열이 자릿수 제한을 넘으면 지수형 소수 8자리로 반올림
        if len(number_to_text(value)) > self.MAX_DIGITS:
            value = Decimal('{:.8e}'.format(value))
        return value

    def _update_memory(self, op) -> CalculatorState:
        try:
            value = op(to_decimal(self._state.memory), to_decimal(self._state.display))
            text = number_to_text(self._round_result(value))
        except (Overflow, InvalidOperation):
            return self._state
        return self._publish(memory=text)


KEY_BINDINGS = {
    '.': ('input_dot', ()),
    '+': ('set_operator', ('+',)),
    '-': ('set_operator', ('-',)),
    '*': ('set_operator', ('*',)),
    'x': ('set_operator', ('*',)),
    'X': ('set_operator', ('*',)),
    '×': ('set_operator', ('*',)),
    '/': ('set_operator', ('/',)),
    '÷': ('set_operator', ('/',)),
    'Enter': ('equal', ()),
    '=': ('equal', ()),
    'Backspace': ('backspace', ()),
    '%': ('percent', ()),
    'c': ('clear', ()),
    'C': ('clear', ()),
}
KEY_BINDINGS.update({d: ('input_digit', (d,)) for d in '0123456789'})

# Qt 특수 키 -> 키 이름
QT_KEY_NAMES = {
    Qt.Key_Return: 'Enter',
    Qt.Key_Enter: 'Enter',
    Qt.Key_Backspace: 'Backspace',
}


class CalculatorWindow(QWidget):
    """PyQt5 UI: 버튼/키보드 → Calculator 엔진 연결"""

    TITLE = 'Calculator'
    BUTTON_ROWS = [
        ['AC',  '←', '%', '÷'],
        ['7',   '8', '9', '×'],
        ['4',   '5', '6', '−'],
        ['1',   '2', '3', '+'],
        ['+/-', '0', '.', '='],
    ]
    BUTTON_ACTIONS = {
        'AC': ('clear', ()),
        '←': ('backspace', ()),
        '%': ('percent', ()),
        '=': ('equal', ()),
        '.': ('input_dot', ()),
        '+/-': ('negative_positive', ()),
    }

    def __init__(self, engine: Optional[Calculator] = None) -> None:
        super().__init__()
        self.engine = engine if engine is not None else Calculator()
        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        self.setWindowTitle(self.TITLE)
        self.buttons = {}
        self.setFocusPolicy(Qt.StrongFocus)
        root = QVBoxLayout()
        root.setContentsMargins(12, 12, 12, 12)
        root.setSpacing(8)
        self.setLayout(root)
        self._build_header(root)

        self.emoji = QLabel()
        self.emoji.setAlignment(Qt.AlignCenter)
        font = QFont(self.emoji.font())
        font.setPointSize(32)
        self.emoji.setFont(font)
        root.addWidget(self.emoji)

        # 대기 중인 연산: '1,500 ×'
        self.pending = QLabel()
        self.pending.setAlignment(Qt.AlignRight)
        root.addWidget(self.pending)

        self.display = QLineEdit()
        self.display.setReadOnly(True)
        self.display.setAlignment(Qt.AlignRight)
        self.display.setFocusPolicy(Qt.NoFocus)
        root.addWidget(self.display)

        self._build_extra(root)
        root.addLayout(self._make_grid(self.BUTTON_ROWS))
        self.resize(360, 560)

    def _build_header(self, root: QVBoxLayout) -> None:
        pass

    def _build_extra(self, root: QVBoxLayout) -> None:
        pass

    def _make_grid(self, rows) -> QGridLayout:
        grid = QGridLayout()
        grid.setSpacing(6)
        for r, row in enumerate(rows):
            for c, label in enumerate(row):
                btn = QPushButton(label)
                btn.setMinimumHeight(52)
                btn.setCursor(Qt.PointingHandCursor)
                btn.setFocusPolicy(Qt.NoFocus)
                # clicked는 checked(bool) 인자를 내보내므로 첫 인자를 흡수하도록 작성
                btn.clicked.connect(lambda checked=False, ch=label: self.on_button(ch))
                grid.addWidget(btn, r, c)
                self.buttons[label] = btn
        return grid

    def on_button(self, ch: str) -> None:
        if ch.isdigit():
            self.engine.input_digit(ch)
        elif ch in ('+', '−', '×', '÷'):
            self.engine.set_operator(ch)
        else:
            name, args = self.BUTTON_ACTIONS[ch]
            getattr(self.engine, name)(*args)
        self.refresh()

    def keyPressEvent(self, event) -> None:
        # 키를 누르고 있을 때 반복 입력은 무시
        if event.isAutoRepeat():
            return
        key = QT_KEY_NAMES.get(event.key(), event.text())
        if self.engine.handle_key(key):
            self.refresh()
        else:
            super().keyPressEvent(event)

    def refresh(self) -> None:
        state = self.engine.state
        self.emoji.setText(EMOTION_EMOJI[state.emotion])
        if state.operation is not None:
            self.pending.setText('{} {}'.format(
                state.previous_value, OPERATOR_LABELS[state.operation]))
        else:
            self.pending.setText('')

        # 긴 숫자는 글자 크기를 줄여 표시
        font = QFont(self.display.font())
        font.setPointSize(max(12, 28 - max(0, len(state.display) - 10)))
        self.display.setFont(font)
        self.display.setText(state.display)


def setup_logger(log_path: Optional[str] = None, level: str = 'INFO') -> logging.Logger:
    """콘솔과 파일(UTF-8, 선택)로 동시에 로그를 남기는 로거를 설정한다."""
    if logger.handlers:
        return logger

    logger.setLevel(level)
    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)s %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 콘솔
    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(formatter)
    logger.addHandler(sh)

    # 파일(UTF-8)
    if log_path:
        fh = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger


def build_parser(description: str = '사칙연산 계산기') -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument('--log', default=None,
                        help='로그 파일 경로(기본값: 콘솔만 사용)')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='로그 레벨(기본값: INFO)')
    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logger(args.log, args.log_level)
    app = QApplication(sys.argv)
    w = CalculatorWindow()
    w.show()
    logger.info('[시작] %s', w.TITLE)
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
