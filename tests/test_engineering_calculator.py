"""공학 함수, 모드 전환, 각도 단위 전환 테스트"""

import pytest

from calculator import (
    BASIC,
    DEG,
    ERROR,
    EXCITED,
    HAPPY,
    NEUTRAL,
    RAD,
    SAD,
    SCIENTIFIC,
    CalculatorState,
)
from engineering_calculator import EngineeringCalculator, factorial


@pytest.fixture
def sci():
    return EngineeringCalculator(mode=SCIENTIFIC)


def enter(calc, text):
    for ch in text:
        if ch == '.':
            calc.input_dot()
        elif ch == '-':
            calc.negative_positive()
        else:
            calc.input_digit(ch)
    return calc


# --- Mode / angle unit ---

def test_defaults():
    calc = EngineeringCalculator()
    assert calc.state == CalculatorState()
    assert calc.state.mode == BASIC
    assert calc.state.angle_unit == DEG


def test_invalid_constructor_arguments():
    with pytest.raises(ValueError):
        EngineeringCalculator(mode='graphing')
    with pytest.raises(ValueError):
        EngineeringCalculator(angle_unit='grad')


def test_toggle_mode_changes_only_mode():
    calc = EngineeringCalculator()
    enter(calc, '42')
    before = calc.state
    after = calc.toggle_mode()
    assert after.mode == SCIENTIFIC
    assert after._replace(mode=BASIC) == before
    assert calc.toggle_mode().mode == BASIC


def test_unary_is_noop_in_basic_mode():
    calc = EngineeringCalculator()
    enter(calc, '16')
    before = calc.state
    assert calc.apply_unary('sqrt') is before


def test_unknown_function_raises(sci):
    with pytest.raises(ValueError):
        sci.apply_unary('sinh')


def test_toggle_angle_unit_keeps_display(sci):
    enter(sci, '30')
    state = sci.toggle_angle_unit()
    assert state.angle_unit == RAD
    assert state.display == '30'
    # 다음 삼각함수 계산에만 영향
    state = sci.apply_unary('sin')
    assert state.display == '-0.988031624'
    assert state.emotion == SAD
    assert sci.toggle_angle_unit().angle_unit == DEG


# --- Trigonometry ---

@pytest.mark.parametrize('fn, degrees, expected', [
    ('sin', '30', '0.5'),
    ('sin', '90', '1'),
    ('cos', '60', '0.5'),
    ('cos', '0', '1'),
    ('tan', '45', '1'),
    ('sin', '0', '0'),
])
def test_trig_in_degrees(sci, fn, degrees, expected):
    enter(sci, degrees)
    assert sci.apply_unary(fn).display == expected


def test_trig_in_radians():
    calc = EngineeringCalculator(mode=SCIENTIFIC, angle_unit=RAD)
    assert calc.apply_unary('cos').display == '1'


# --- Powers, roots, logarithms ---

def test_sqrt(sci):
    enter(sci, '16')
    state = sci.apply_unary('sqrt')
    assert state.display == '4'
    assert state.emotion == NEUTRAL


def test_sqrt_is_rounded(sci):
    enter(sci, '2')
    assert sci.apply_unary('√').display == '1.41421356'


def test_sqrt_of_negative_is_error(sci):
    enter(sci, '4-')
    assert sci.state.display == '-4'
    state = sci.apply_unary('sqrt')
    assert state.display == ERROR
    assert state.emotion == SAD


def test_square_and_cube(sci):
    enter(sci, '12')
    state = sci.apply_unary('x²')
    assert state.display == '144'
    assert state.emotion == HAPPY

    sci.clear()
    enter(sci, '11')
    state = sci.apply_unary('cube')
    assert state.display == '1,331'
    assert state.emotion == EXCITED

    sci.clear()
    enter(sci, '2-')
    assert sci.apply_unary('x³').display == '-8'


def test_square_overflow_is_error():
    calc = EngineeringCalculator(mode=SCIENTIFIC)
    calc._state = calc.state._replace(display='1e+200')
    assert calc.apply_unary('square').display == ERROR


def test_log_and_ln(sci):
    enter(sci, '1000')
    assert sci.apply_unary('log').display == '3'
    sci.clear()
    enter(sci, '1')
    assert sci.apply_unary('ln').display == '0'


@pytest.mark.parametrize('fn, value', [
    ('log', '0'),
    ('ln', '0'),
    ('log', '1-'),
    ('ln', '5-'),
])
def test_log_domain_errors(sci, fn, value):
    enter(sci, value)
    assert sci.apply_unary(fn).display == ERROR


def test_reciprocal(sci):
    enter(sci, '4')
    assert sci.apply_unary('1/x').display == '0.25'


def test_reciprocal_of_zero_is_error(sci):
    state = sci.apply_unary('reciprocal')
    assert state.display == ERROR
    assert state.emotion == SAD


def test_exp(sci):
    enter(sci, '1')
    assert sci.apply_unary('eˣ').display == '2.71828183'


def test_exp_overflow_is_error(sci):
    enter(sci, '1000')
    assert sci.apply_unary('exp').display == ERROR


# --- Factorial ---

@pytest.mark.parametrize('value, expected', [
    ('0', '1'),
    ('1', '1'),
    ('5', '120'),
    ('10', '3,628,800'),
])
def test_factorial(sci, value, expected):
    enter(sci, value)
    assert sci.apply_unary('factorial').display == expected


@pytest.mark.parametrize('value', ['3-', '2.5', '171'])
def test_factorial_domain_errors(sci, value):
    enter(sci, value)
    state = sci.apply_unary('n!')
    assert state.display == ERROR
    assert state.emotion == SAD


def test_factorial_upper_bound(sci):
    enter(sci, '170')
    assert sci.apply_unary('!').display != ERROR


def test_factorial_function_guards_non_integers():
    assert factorial(0) == 1
    assert factorial(6) == 720
    with pytest.raises(ValueError):
        factorial(0.5)
    with pytest.raises(ValueError):
        factorial(-1)


# --- Constants ---

def test_constants_ignore_display(sci):
    enter(sci, '999')
    assert sci.apply_unary('pi').display == '3.14159265'
    assert sci.apply_unary('e').display == '2.71828183'


def test_constant_replaces_error(sci):
    sci.apply_unary('reciprocal')
    assert sci.state.display == ERROR
    state = sci.apply_unary('π')
    assert state.display == '3.14159265'
    assert state.emotion == NEUTRAL


# --- Interaction with pending operation ---

def test_unary_keeps_pending_operation(sci):
    enter(sci, '2')
    sci.set_operator('+')
    enter(sci, '9')
    state = sci.apply_unary('sqrt')
    assert state.display == '3'
    assert state.operation == '+'
    assert sci.equal().display == '5'


def test_unary_on_error_display_stays_error(sci):
    sci.apply_unary('reciprocal')
    assert sci.apply_unary('sqrt').display == ERROR
