from typing import Optional, Protocol


class AppHooks(Protocol):
    """
    Protocol for application hooks to follow generation progress.

    This can be implemented by the main application to drive a progress bar
    or status line. Hooks only observe a run; they never change its results
    and cannot stop it.

    Methods:
        report_step(info, target, reset_counter, plus_step) -> None:
            Report progress of the current pass.
    """
    def report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 1) -> None:
        """
        Report progress messages from the generation pipeline.

        Args:
            info (str): Progress message, e.g. the name of the pass starting.
            target (Optional[int]): Total number of steps expected, if known.
            reset_counter (bool): Restart the step counter.
            plus_step (int): Number of steps completed since the last report.
        """
        pass
