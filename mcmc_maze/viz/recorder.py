import logging
import os
import pygame
import cv2
import numpy as np
from datetime import datetime

logger = logging.getLogger(__name__)

class VideoRecorder:
    """Writes pygame frames to an MP4 file (OpenCV, mp4v codec)."""

    def __init__(self, active=False, output_file=None, fps=30):
        self.active = active
        self.output_file = output_file
        self.fps = fps
        self.writer = None
        self.frame_size = None
        self.frame_count = 0

        if self.active and not self.output_file:
            self.output_file = self.default_filename()

    @staticmethod
    def default_filename(directory="recordings") -> str:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        fname = f"mcmc_solve_{ts}.mp4"
        if os.path.isdir(directory):
            return os.path.join(directory, fname)
        return fname

    @staticmethod
    def surface_to_frame(surface: pygame.Surface) -> np.ndarray:
        # pygame gives (width, height, RGB); OpenCV wants (height, width, BGR)
        view = pygame.surfarray.array3d(surface)
        frame = np.transpose(view, (1, 0, 2))
        return cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)

    def capture_frame(self, surface: pygame.Surface):
        if not self.active:
            return

        frame = self.surface_to_frame(surface)
        height, width = frame.shape[:2]

        # Writer is sized from the first frame; later frames must match
        if self.writer is None:
            fourcc = cv2.VideoWriter_fourcc(*'mp4v')
            self.writer = cv2.VideoWriter(self.output_file, fourcc, self.fps, (width, height))
            self.frame_size = (width, height)
            logger.info(f"Recording started: {self.output_file}")
        elif (width, height) != self.frame_size:
            frame = cv2.resize(frame, self.frame_size)

        self.writer.write(frame)
        self.frame_count += 1

    def stop(self):
        if self.writer:
            self.writer.release()
            logger.info(f"Video saved: {self.output_file} ({self.frame_count} frames)")
            self.writer = None
