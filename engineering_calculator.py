# engineering_calculator.py
# Python 3.x, PyQt5
# 표준 라이브러리 + PyQt만 사용, PEP 8 준수, 문자열은 기본 ' ' 사용

import sys
import math  # 삼각/로그/상수/각도 변환 [표준 모듈]
from decimal import Decimal, InvalidOperation
from typing import Optional

from PyQt5.QtWidgets import (
    QApplication,
    QWidget,
    QVBoxLayout,
    QPushButton,
)

from calculator import (
    BASIC,
    SCIENTIFIC,
    DEG,
    RAD,
    Calculator,
    CalculatorState,
    CalculatorWindow,
    build_parser,
    format_number,
    get_emotion,
    logger,
    number_to_text,
    setup_logger,
    unformat_number,
)

MAX_FACTORIAL = 170  # 171! 은 double 범위를 넘는다

# 인자 없이 값을 그대로 넣는 상수
CONSTANTS = {
    'pi': math.pi,
    'e': math.e,
}


class EngineeringCalculator(Calculator):
    """공학 기능 확장: sin/cos/tan/√/x²/x³/log/ln/n!/1/x/eˣ/π/e + 모드, 각도 단위 전환"""

    FUNCTIONS = (
        'sin', 'cos', 'tan', 'sqrt', 'square', 'cube', 'log', 'ln',
        'factorial', 'reciprocal', 'exp', 'pi', 'e',
    )
    # 버튼 라벨 -> 함수 이름
    FUNCTION_ALIASES = {
        '√': 'sqrt',
        'x²': 'square',
        'x³': 'cube',
        'n!': 'factorial',
        '!': 'factorial',
        '1/x': 'reciprocal',
        'inv': 'reciprocal',
        'eˣ': 'exp',
        'π': 'pi',
    }

    def __init__(self, mode: str = BASIC, angle_unit: str = DEG) -> None:
        if mode not in (BASIC, SCIENTIFIC):
            raise ValueError('unknown mode: {!r}'.format(mode))
        if angle_unit not in (DEG, RAD):
            raise ValueError('unknown angle unit: {!r}'.format(angle_unit))
        super().__init__(CalculatorState(mode=mode, angle_unit=angle_unit))

    # 모드/각도 단위 제어
    def toggle_mode(self) -> CalculatorState:
        mode = SCIENTIFIC if self._state.mode == BASIC else BASIC
        return self._publish(mode=mode)

    def toggle_angle_unit(self) -> CalculatorState:
        # 현재 표시 값은 그대로, 다음 삼각함수 계산에만 영향
        angle_unit = RAD if self._state.angle_unit == DEG else DEG
        return self._publish(angle_unit=angle_unit)

    def apply_unary(self, fn: str) -> CalculatorState:
        """현재 표시 값에 단항 함수를 적용한다. 공학용 모드에서만 동작."""
        name = self.FUNCTION_ALIASES.get(fn, fn)
        if name not in self.FUNCTIONS:
            raise ValueError('unknown function: {!r}'.format(fn))
        if self._state.mode != SCIENTIFIC:
            return self._state

        try:
            if name in CONSTANTS:
                y = CONSTANTS[name]
            else:
                y = self._compute(name, self._get_current_number())
            if math.isnan(y) or math.isinf(y):
                raise ValueError('not a finite result')
            result = self._round_result(Decimal(repr(y)))
        except (ValueError, OverflowError, ZeroDivisionError, InvalidOperation):
            logger.warning('%s(%s) -> Error', name, self._state.display)
            return self._set_error()

        logger.debug('%s(%s) = %s', name, self._state.display, result)
        return self._publish(
            display=format_number(number_to_text(result)),
            emotion=get_emotion(result),
        )

    # 공용 유틸
    def _get_current_number(self) -> float:
        # 'Error' 는 float 변환에서 ValueError
        return float(unformat_number(self._state.display))

    def _to_radians_if_needed(self, x: float) -> float:
        return math.radians(x) if self._state.angle_unit == DEG else x

    def _compute(self, name: str, x: float) -> float:
        if name == 'sin':
            return math.sin(self._to_radians_if_needed(x))
        if name == 'cos':
            return math.cos(self._to_radians_if_needed(x))
        if name == 'tan':
            return math.tan(self._to_radians_if_needed(x))
        if name == 'sqrt':
            return math.sqrt(x)
        if name == 'square':
            return x ** 2
        if name == 'cube':
            return x ** 3
        if name == 'log':
            return math.log10(x)
        if name == 'ln':
            return math.log(x)
        if name == 'factorial':
            return factorial(x)
        if name == 'reciprocal':
            return 1 / x
        return math.exp(x)


def factorial(x: float) -> float:
    """0 이상 MAX_FACTORIAL 이하의 정수만 허용한다."""
    if x < 0 or x > MAX_FACTORIAL or x != int(x):
        raise ValueError('factorial is defined for integers 0..{}'.format(MAX_FACTORIAL))
    return float(math.factorial(int(x)))


class EngineeringCalculatorWindow(CalculatorWindow):
    """공학용 계산기 UI: 기본 버튼 + 공학 버튼 → EngineeringCalculator 매핑"""

    TITLE = 'Engineering Calculator'
    SCIENTIFIC_ROWS = [
        ['sin', 'cos', 'tan', 'DEG'],
        ['√',   'x²',  'x³',  'log'],
        ['ln',  'n!',  '1/x', 'eˣ'],
        ['π',   'e',   'mc',  'm+'],
        ['m-',  'mr'],
    ]
    BUTTON_ACTIONS = {
        **CalculatorWindow.BUTTON_ACTIONS,
        'DEG': ('toggle_angle_unit', ()),
        'mc': ('memory_clear', ()),
        'm+': ('memory_add', ()),
        'm-': ('memory_subtract', ()),
        'mr': ('memory_recall', ()),
    }
    MODE_LABELS = {BASIC: '공학용 모드', SCIENTIFIC: '기본 모드'}

    def __init__(self, engine: Optional[EngineeringCalculator] = None) -> None:
        super().__init__(engine if engine is not None else EngineeringCalculator())

    def _build_header(self, root: QVBoxLayout) -> None:
        self.mode_button = QPushButton()
        self.mode_button.clicked.connect(lambda checked=False: self.on_toggle_mode())
        root.addWidget(self.mode_button)

    def _build_extra(self, root: QVBoxLayout) -> None:
        self.scientific_panel = QWidget()
        self.scientific_panel.setLayout(self._make_grid(self.SCIENTIFIC_ROWS))
        root.addWidget(self.scientific_panel)

    def on_toggle_mode(self) -> None:
        self.engine.toggle_mode()
        self.refresh()

    def on_button(self, ch: str) -> None:
        name = self.engine.FUNCTION_ALIASES.get(ch, ch)
        if name in self.engine.FUNCTIONS:
            self.engine.apply_unary(name)
            self.refresh()
        else:
            super().on_button(ch)

    def refresh(self) -> None:
        super().refresh()
        state = self.engine.state
        self.mode_button.setText(self.MODE_LABELS[state.mode])
        # 버튼 자체의 라벨을 현재 각도 단위로 바꾼다
        self.buttons['DEG'].setText(state.angle_unit.upper())
        self.scientific_panel.setVisible(state.mode == SCIENTIFIC)


def build_engineering_parser():
    parser = build_parser('공학용 계산기')
    parser.add_argument('--scientific', action='store_true',
                        help='공학용 모드로 시작')
    parser.add_argument('--radians', action='store_true',
                        help='각도 단위를 라디안으로 시작(기본값: 도)')
    return parser


def parse_args(argv=None):
    return build_engineering_parser().parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logger(args.log, args.log_level)
    app = QApplication(sys.argv)
    engine = EngineeringCalculator(
        mode=SCIENTIFIC if args.scientific else BASIC,
        angle_unit=RAD if args.radians else DEG,
    )
    w = EngineeringCalculatorWindow(engine)
    w.show()
    logger.info('[시작] %s (mode=%s, angle=%s)', w.TITLE,
                engine.state.mode, engine.state.angle_unit)
    sys.exit(app.exec())


if __name__ == '__main__':
    main()
