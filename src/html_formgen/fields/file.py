"""
File upload input.

Posted state and value come from the submission's file registry instead of
its values. A form holding a FileInput renders with multipart encoding.
"""

from pathlib import Path
from typing import List, Optional
import logging

from html_formgen.forms.field_node import FieldNode
from html_formgen.forms.ui_utils import render_attribute
from html_formgen.io import UploadedFile
from html_formgen.protocols import get_form_config

logger = logging.getLogger(__name__)


class FileInput(FieldNode):
    _field_type = "file"
    input_type = "file"

    def _capture_posted(self) -> None:
        uploaded = self._submission.get_file(self._name)
        if uploaded is not None and uploaded.tmp_path is not None:
            self._posted = str(uploaded.tmp_path)
            self._selected = self._posted

    def is_posted(self) -> bool:
        uploaded = self._submission.get_file(self._name)
        return uploaded is not None and uploaded.tmp_path is not None

    def get_file(self) -> Optional[UploadedFile]:
        return self._submission.get_file(self._name)

    def get_contents(self) -> Optional[str]:
        """
        Contents of the uploaded file as text.

        Returns:
            The decoded contents, or None when nothing was uploaded

        Raises:
            OSError: If the temporary file cannot be read
            UnicodeDecodeError: If the upload is not valid UTF-8
        """
        if not self.is_posted():
            return None
        return Path(self._posted).read_text(encoding="utf-8")

    def get_lines(self) -> Optional[List[str]]:
        """Uploaded file as lines without line endings, or None when nothing was uploaded."""
        contents = self.get_contents()
        if contents is None:
            return None
        return contents.splitlines()

    def render(self) -> str:
        self._check_validity()

        # browsers take the size attribute as the width of a file input
        size = self._size if self._size else get_form_config().file_input_size

        output = (
            self.render_label()
            + "<input"
            + self.render_type()
            + self.render_id()
            + self.render_class()
            + self.render_name()
            + self.render_style()
            + self.render_disabled()
            + render_attribute("size", size)
            + self.render_title()
            + self.render_data_attributes()
            + self.render_required()
            + self.render_auto_focus()
            + " />\n"
        )
        return output + self.render_invalidations()
