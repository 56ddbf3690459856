"""
flowy Decorators

Use these decorators to turn plain functions into flowy subcommands. flowy chains its
subcommands (e.g. "flowy solar ~/walls 51.5 -0.13 run"): every subcommand returns a
callback immediately on invocation, and once the command line has been parsed the
callbacks are run in order, each receiving the shared FlowyState.

A subcommand written with these decorators looks like:

    @click.command(name="show")
    @callback
    @catch_errors
    @require_schedule
    def cli(state: FlowyState):
        '''Show the schedule'''

        print_schedule(state.schedule)
        return state

The first positional argument is the state; everything click parsed from the command
line arrives as keyword arguments.
"""

import sys
from functools import wraps
from functools import partial

from flowy.config import config
from flowy.schedule import Schedule
from flowy.FlowyState import FlowyState
from flowy.cli_utils.console import fail, describe


def callback(func):
    """
    Convert func into a function that returns func as a callback instead of running it.

    Invoking the decorated name with the command line arguments only binds them; the
    returned callback has to be called with the FlowyState to actually execute the body.
    This is equivalent to writing an inner function by hand in every subcommand:

        def my_command(cli_args):

            def my_callback(state):
                # body of command logic in here, run by the result callback later
                return state

            return my_callback
    """

    @wraps(func)
    def _callback(*args, **kwargs):
        @wraps(func)
        def wrapper(*fargs, **fkwargs):
            new_func = partial(func, *args, **kwargs)
            return new_func(*fargs, **fkwargs)

        return wrapper

    return _callback


def require_schedule(func):
    """
    Make sure state.schedule is populated before func runs, loading the persisted
    schedule when no earlier subcommand in the chain generated one.
    """

    @wraps(func)
    def wrapper(state: FlowyState, *args, **kwargs):
        if state.schedule is None:
            state.schedule = Schedule.load(config.FLOWY_SCHEDULE_FILE)
            describe(
                f":page_facing_up-emoji: loaded schedule from {config.FLOWY_SCHEDULE_FILE}"
            )
        return func(state, *args, **kwargs)

    return wrapper


def catch_errors(func):
    """
    Catch and format errors with the "fail" console template and exit the application
    with an error code.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as error:
            fail(str(error))
            sys.exit(1)

    return wrapper
