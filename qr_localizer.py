"""
Finds a QR code in a raster image and resamples it into a module matrix.

The image is assumed to hold one upright, uniformly scaled code on a light
background. Localisation moves through explicit states:

    SCANNING -> CANDIDATE_FOUND -> VALIDATED -> EXTRACTED

and each step gives up on the current candidate instead of jumping out of
the scan.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from PIL import Image

from qr_tables import MAX_VERSION, MIN_VERSION, symbol_size

logger = logging.getLogger(__name__)

# Samples whose brightest channel is below this are dark; samples whose
# darkest channel is above 255 - DARK_THRESHOLD are light
DARK_THRESHOLD = 16

# Dark/light cut-off when resampling module centres
SAMPLE_THRESHOLD = 127

DARK, LIGHT, UNCLEAR = 1, 0, -1

VALID_SIZES = {symbol_size(v) for v in range(MIN_VERSION, MAX_VERSION + 1)}


class LocatorState(Enum):
    SCANNING = "scanning"
    CANDIDATE_FOUND = "candidate found"
    VALIDATED = "validated"
    EXTRACTED = "extracted"


@dataclass
class FinderCandidate:
    """Top-left pixel of a possible finder pattern and its module pitch."""
    top: int
    left: int
    pitch: int


@dataclass
class LocatedSymbol:
    """A QR code found in an image."""
    top: int
    left: int
    pitch: int
    modules: list

    @property
    def size(self) -> int:
        return len(self.modules)


class Localizer:
    """
    Locates and samples the QR code held by one image.

    Usage:
        located = Localizer(image).locate()
        if located is None:
            print("No QR code found")
    """

    def __init__(self, image: Image.Image):
        self.image = image.convert("RGB")
        self.width, self.height = self.image.size
        self.pixels = self.image.load()
        self.state = LocatorState.SCANNING

    def tone(self, row: int, col: int) -> int:
        """
        Classify one sample as DARK, LIGHT or UNCLEAR.

        Samples outside the image are UNCLEAR.
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            return UNCLEAR
        pixel = self.pixels[col, row]
        if max(pixel) < DARK_THRESHOLD:
            return DARK
        if min(pixel) > 255 - DARK_THRESHOLD:
            return LIGHT
        return UNCLEAR

    def candidates(self):
        """Yield every horizontal dark run long enough to be a finder pattern edge, row-major."""
        for row in range(self.height):
            col = 0
            while col < self.width:
                if self.tone(row, col) != DARK:
                    col += 1
                    continue
                end = col
                while end < self.width and self.tone(row, end) == DARK:
                    end += 1
                pitch = (end - col) // 7
                if pitch >= 1:
                    yield FinderCandidate(row, col, pitch)
                col = end

    def is_finder(self, top: int, left: int, pitch: int) -> bool:
        """
        Check the finder pattern structure at a position.

        The left column must be dark for 7 modules, the inset column light
        for the 5 modules inside the outer square, and the centre dark.
        """
        half = pitch // 2
        for k in range(7):
            if self.tone(top + k * pitch + half, left + half) != DARK:
                return False
        for k in range(1, 6):
            if self.tone(top + k * pitch + half, left + pitch + half) != LIGHT:
                return False
        return self.tone(top + 3 * pitch + half, left + 3 * pitch + half) == DARK

    def find_extent(self, candidate: FinderCandidate):
        """
        Scan right along the finder's top row for the top-right finder pattern.

        @return: Side of the symbol in modules, or None
        """
        top, left, pitch = candidate.top, candidate.left, candidate.pitch
        half = pitch // 2
        run = 0
        for col in range(left + 7 * pitch + half, self.width, pitch):
            tone = self.tone(top + half, col)
            if tone == UNCLEAR:
                return None
            if tone == LIGHT:
                run = 0
                continue
            run += 1
            if run < 7:
                continue
            right_left = col - half - 6 * pitch
            if not self.is_finder(top, right_left, pitch):
                continue
            size = (right_left - left) // pitch + 7
            if size not in VALID_SIZES:
                continue
            if self.is_finder(top + (size - 7) * pitch, left, pitch):
                return size
        return None

    def extract(self, candidate: FinderCandidate, size: int) -> list[list[int]]:
        """Sample one value per module centre."""
        half = candidate.pitch // 2
        modules = []
        for i in range(size):
            row = candidate.top + i * candidate.pitch + half
            modules.append([
                1 if max(self.pixels[candidate.left + j * candidate.pitch + half, row]) < SAMPLE_THRESHOLD else 0
                for j in range(size)
            ])
        return modules

    def locate(self):
        """
        Find the QR code.

        @return: LocatedSymbol, or None if no valid finder pattern pair exists
        """
        for candidate in self.candidates():
            self.state = LocatorState.CANDIDATE_FOUND
            if not self.is_finder(candidate.top, candidate.left, candidate.pitch):
                self.state = LocatorState.SCANNING
                continue
            self.state = LocatorState.VALIDATED
            size = self.find_extent(candidate)
            if size is None:
                self.state = LocatorState.SCANNING
                continue
            modules = self.extract(candidate, size)
            self.state = LocatorState.EXTRACTED
            logger.debug("QR code of %d modules at (%d, %d), %d px per module",
                         size, candidate.top, candidate.left, candidate.pitch)
            return LocatedSymbol(candidate.top, candidate.left, candidate.pitch, modules)
        self.state = LocatorState.SCANNING
        logger.debug("No finder pattern pair found")
        return None


def locate_symbol(image: Image.Image):
    """
    Locate a QR code in an image and resample its modules.

    @param image: Any Pillow image
    @return: LocatedSymbol, or None when no QR code is found
    """
    return Localizer(image).locate()
