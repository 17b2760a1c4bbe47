import signal
import time

from cpackget.signals import (
    set_abort_check,
    should_abort,
    start_signal_watcher,
    stop_signal_watcher,
)


def test_start_and_stop_watcher():
    start_signal_watcher()
    time.sleep(0.1)
    assert should_abort() is False
    stop_signal_watcher()
    time.sleep(0.1)
    assert should_abort() is True
    set_abort_check(None)
    assert should_abort() is False


def test_traps_ctrl_c():
    start_signal_watcher()
    assert should_abort() is False
    signal.raise_signal(signal.SIGINT)
    time.sleep(0.1)
    assert should_abort() is True
    set_abort_check(None)
    assert signal.getsignal(signal.SIGINT) is not None


def test_custom_abort_check():
    set_abort_check(lambda: True)
    assert should_abort() is True
    set_abort_check(None)
    assert should_abort() is False