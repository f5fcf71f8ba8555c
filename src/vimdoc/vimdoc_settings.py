"""Settings that control how vimdoc is classified and rendered."""

from dataclasses import dataclass
import json


@dataclass
class VimdocSettings:
    """
    Conversion settings.

    Attributes:
        code_indent: Number of leading spaces that mark a line as code
        tab_width: Tab stop used when removing common code indentation
        min_rule_width: Shortest run of '=' or '-' treated as a heading rule
        dedent_code: Remove the common indentation of code blocks
        skip_noise: Leave modelines and help-file title lines out of the output
        standalone: Wrap the rendered body in a complete HTML page
        title: Page title used for standalone output
    """
    code_indent: int = 4
    tab_width: int = 8
    min_rule_width: int = 3
    dedent_code: bool = False
    skip_noise: bool = False
    standalone: bool = False
    title: str = ""

    @classmethod
    def create_default(cls) -> "VimdocSettings":
        """Create a new VimdocSettings object with default values."""
        return cls()

    @classmethod
    def load(cls, path: str) -> "VimdocSettings":
        """
        Load settings from file.

        Args:
            path: Path to the settings file

        Returns:
            VimdocSettings object with loaded values

        Raises:
            json.JSONDecodeError: If file contains invalid JSON
        """
        settings = cls.create_default()

        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)

            settings.code_indent = max(1, int(data.get("codeIndent", settings.code_indent)))
            settings.tab_width = max(1, int(data.get("tabWidth", settings.tab_width)))
            settings.min_rule_width = max(1, int(data.get("minRuleWidth", settings.min_rule_width)))
            settings.dedent_code = bool(data.get("dedentCode", settings.dedent_code))
            settings.skip_noise = bool(data.get("skipNoise", settings.skip_noise))
            settings.standalone = bool(data.get("standalone", settings.standalone))
            settings.title = str(data.get("title", settings.title))

        return settings

    def save(self, path: str) -> None:
        """
        Save settings to file.

        Args:
            path: Path to save the settings file
        """
        data = {
            "codeIndent": self.code_indent,
            "tabWidth": self.tab_width,
            "minRuleWidth": self.min_rule_width,
            "dedentCode": self.dedent_code,
            "skipNoise": self.skip_noise,
            "standalone": self.standalone,
            "title": self.title
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
