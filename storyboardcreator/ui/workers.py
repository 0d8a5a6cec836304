# storyboardcreator/ui/workers.py
from __future__ import annotations

import traceback
from pathlib import Path

from PySide6.QtCore import QObject, QRunnable, Signal


# Worker signals for generic tasks
class WorkerSignals(QObject):
    """
    Common signals available from worker runnables.
    - finished() always emitted on completion (no args)
    - error(tuple) emitted on exception: (exc, traceback_str)
    - result(object) emitted with task-specific result (e.g. Storyboard)
    """

    finished = Signal()
    error = Signal(object)
    result = Signal(object)


class _StoryboardRunnable(QRunnable):
    """
    Runs one blocking storyboard operation on a QThreadPool thread.
    Once started the operation cannot be cancelled; a caller that no longer
    wants the result should ignore it and close the returned session.
    """

    def __init__(self, storage_service):
        super().__init__()
        self.signals = WorkerSignals()
        self.storage = storage_service

    def work(self):
        raise NotImplementedError

    def run(self):
        try:
            self.signals.result.emit(self.work())
        except Exception as exc:
            tb = traceback.format_exc()
            self.signals.error.emit((exc, tb))
        finally:
            self.signals.finished.emit()


class LoadRunnable(_StoryboardRunnable):
    def __init__(self, storage_service, archive_path: Path):
        super().__init__(storage_service)
        self.archive_path = Path(archive_path)

    def work(self):
        return self.storage.open_project(self.archive_path)


class SaveRunnable(_StoryboardRunnable):
    def __init__(self, storage_service, storyboard, archive_path: Path):
        super().__init__(storage_service)
        self.storyboard = storyboard
        self.archive_path = Path(archive_path)

    def work(self):
        return self.storage.save_project(self.storyboard, self.archive_path)


class CloseRunnable(_StoryboardRunnable):
    def __init__(self, storage_service, storyboard):
        super().__init__(storage_service)
        self.storyboard = storyboard

    def work(self):
        self.storage.close_project(self.storyboard)
        return self.storyboard.staging_path


class AddImageRunnable(_StoryboardRunnable):
    """Copy an image into the cache and attach it to shot `index`; result is the cached file name."""

    def __init__(self, storage_service, storyboard, image_path: Path, index: int):
        super().__init__(storage_service)
        self.storyboard = storyboard
        self.image_path = Path(image_path)
        self.index = index

    def work(self):
        return self.storage.attach_image(self.storyboard, self.index, self.image_path)
