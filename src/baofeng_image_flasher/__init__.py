"""
Baofeng Image Flasher - Interactive chirpc front end for Baofeng handhelds

Download and upload radio memory images, or program a batch of radios with
the same image one after another.
"""

__version__ = "0.1.0"

from baofeng_image_flasher.core import ProcessRunner, UploadSequence, download, upload

__all__ = [
    "ProcessRunner",
    "UploadSequence",
    "download",
    "upload",
    "__version__",
]
