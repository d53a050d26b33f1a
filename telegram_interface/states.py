"""
FSM States - intake form states

Telegram has no modal forms, so the intake form is collected in two steps:
pick a topic from the inline keyboard, then reply with the situation text.
"""

from aiogram.fsm.state import State, StatesGroup


class IntakeStates(StatesGroup):
    """Intake form progress"""

    choosing_topic = State()         # Topic keyboard shown
    describing_situation = State()   # Waiting for the situation text
