import pytest

from elevator_bank.exceptions import UnknownElevatorError
from elevator_bank.loader import ScriptRunner
from elevator_bank.models import Rider
from elevator_bank.scheduler import Dispatcher


@pytest.fixture
def mock_dispatcher(mocker):
    return mocker.Mock(spec=Dispatcher)


@pytest.fixture
def runner(mock_dispatcher, mocker):
    return ScriptRunner(mock_dispatcher, sleep=mocker.Mock())


def test_runs_each_command(runner, mock_dispatcher):
    summary = runner.run(
        [
            "# warm up",
            "init 5 2",
            "rider bob 0 4",
            "sleep 2",
            "open b on",
            "close a off",
        ]
    )

    assert (summary.executed, summary.skipped, summary.failed) == (5, 1, 0)
    assert not summary.quit
    mock_dispatcher.start.assert_called_once_with(5, 2)
    mock_dispatcher.add_rider.assert_called_once_with(0, Rider("bob", 4))
    runner._sleep.assert_called_once_with(2.0)
    mock_dispatcher.force_open_door.assert_called_once_with("b", True)
    mock_dispatcher.force_close_door.assert_called_once_with("a", False)


def test_quit_stops_reading(runner, mock_dispatcher):
    summary = runner.run(["init 3 1", "quit", "rider bob 0 2"])

    assert summary.quit
    assert summary.executed == 1
    mock_dispatcher.add_rider.assert_not_called()


def test_malformed_line_is_skipped(runner, mock_dispatcher):
    summary = runner.run(["init 3", "init 3 1", "rider bob 1 1", "rider amy 0 2"])

    assert summary.failed == 2
    assert summary.executed == 2
    mock_dispatcher.start.assert_called_once_with(3, 1)
    mock_dispatcher.add_rider.assert_called_once_with(0, Rider("amy", 2))


def test_dispatcher_errors_do_not_stop_the_script(runner, mock_dispatcher):
    mock_dispatcher.force_open_door.side_effect = UnknownElevatorError("unknown elevator 'z'")

    summary = runner.run(["init 3 1", "open z on", "rider amy 0 2"])

    assert summary.failed == 1
    assert summary.executed == 2
    mock_dispatcher.add_rider.assert_called_once()


def test_runner_against_real_dispatcher(dispatcher, mocker):
    mocker.patch.object(dispatcher, "start", side_effect=dispatcher.setup)
    runner = ScriptRunner(dispatcher, sleep=mocker.Mock())

    summary = runner.run(["init 5 1", "rider bob 1 3", "rider amy 9 0"])

    assert summary.failed == 1
    assert dispatcher.get_floor(1).waiting == [Rider("bob", 3)]
    assert len(dispatcher.pending_requests()) == 1
