"""Circuit design helpers that turn requirements into target resistances."""

from .timer import TimerTargets, timer_resistances, design_timer, DEFAULT_CAPACITANCE

__all__ = [
    'TimerTargets',
    'timer_resistances',
    'design_timer',
    'DEFAULT_CAPACITANCE'
]
