import dataclasses
import shutil
import textwrap
from collections import defaultdict


class BaseConfig:
    """Base class for xedit configuration dataclasses.

    Fields declare a ``group`` and a ``description`` in their metadata; the
    display methods below render them as grouped tables in Jupyter and in the
    terminal. Inherit from this class when creating new configs.
    """

    def _get_grouped_fields(self):
        """Help to organize fields by group metadata."""
        grouped = defaultdict(list)
        for f in dataclasses.fields(self):
            grouped[f.metadata.get("group", "Other / Ungrouped")].append(f)
        return grouped

    def _get_description(self) -> str:
        """First line of the class docstring, or a generic header."""
        doc = self.__class__.__doc__
        if doc:
            lines = [line.strip() for line in doc.strip().split("\n") if line.strip()]
            if lines:
                return lines[0]
        return f"Current settings for {self.__class__.__name__}:"

    @staticmethod
    def _type_name(f: dataclasses.Field) -> str:
        return f.type.__name__ if hasattr(f.type, "__name__") else str(f.type)

    def _repr_markdown_(self) -> str:
        """Grouped parameter tables for notebook and Markdown renderers."""
        md = [f"### {self.__class__.__name__}", f"\n*{self._get_description()}*\n"]

        for group_name, fields in self._get_grouped_fields().items():
            md.append(f"\n**{group_name}**\n")
            md.append("| Parameter | Current Value | Type | Description |")
            md.append("| :--- | :---: | :---: | :--- |")
            for f in fields:
                desc = f.metadata.get("description", "")
                md.append(
                    f"| `{f.name}` | `{getattr(self, f.name)!r}` "
                    f"| *{self._type_name(f)}* | {desc} |"
                )

        return "\n".join(md)

    def __str__(self) -> str:
        """Terminal text fallback. Aligns columns and wraps descriptions."""
        term_width = shutil.get_terminal_size((100, 20)).columns

        fields = dataclasses.fields(self)
        col1_w = max(len(f.name) for f in fields) + 2
        col2_w = max(len(repr(getattr(self, f.name))) for f in fields) + 2
        col3_w = max(len(self._type_name(f)) for f in fields) + 2
        col4_w = max(term_width - col1_w - col2_w - col3_w - 6, 20)

        lines = ["\n" + "=" * term_width]
        lines.append(f"{self.__class__.__name__} - Current Settings".center(term_width))
        lines.append("=" * term_width)

        for group_name, group_fields in self._get_grouped_fields().items():
            lines.append(f"\n[ {group_name.upper()} ]")

            for f in group_fields:
                val = repr(getattr(self, f.name))
                desc = f.metadata.get("description", "")
                wrapped = textwrap.wrap(desc, width=col4_w) or [""]

                lines.append(
                    f"  {f.name:<{col1_w}} {val:<{col2_w}} "
                    f"{self._type_name(f):<{col3_w}} ┃ {wrapped[0]}"
                )
                empty_space = " " * (col1_w + col2_w + col3_w + 3)
                lines.extend(f"{empty_space}┃ {line}" for line in wrapped[1:])

        lines.append("=" * term_width + "\n")
        return "\n".join(lines)
