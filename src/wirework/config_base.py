"""Mixin for objects that configure themselves from a configuration document."""

from typing import Optional

from wirework.component_builder import ComponentBuilder
from wirework.document import DocumentSource, load_document
from wirework.domain import SettingsRecord

__all__ = ["ConfigBase"]


class ConfigBase:
    """Base for known types that read their own parameters from a document.

    Subclasses define ``set_*`` mutators as usual and call :meth:`configure`
    with the tag of their section. Override :meth:`handle_settings` to react to
    which parameters were given explicitly.

    Example:
        >>> class Pipeline(ConfigBase):
        ...     def set_num_clients(self, value: int):
        ...         self.num_clients = value
        >>>
        >>> Pipeline().configure("pipeline", "config.xml")
        SettingsRecord(['numClients'])
    """

    def configure(
        self, tag: str, source: DocumentSource, builder: Optional[ComponentBuilder] = None
    ) -> SettingsRecord:
        """Apply the params of every section named ``tag`` to this object.

        Sections are applied in document order, so a later section overrides an
        earlier one. The lifecycle runs after each section is applied; with no
        matching section nothing is applied and the lifecycle does not run.

        Args:
            tag: Tag name of the section(s) describing this object.
            source: The configuration document, or anything :func:`load_document` accepts.
            builder: Builder whose parameter applier is used; a default one if None.

        Returns:
            The names of the parameters applied.

        Raises:
            ConfigError: If the document is invalid or a parameter cannot be applied.
        """
        builder = builder or ComponentBuilder()
        document = load_document(source)
        settings = SettingsRecord()
        for section in document.sections(tag):
            builder.configure(self, section, settings)

        self.handle_settings(settings)
        return settings

    def handle_settings(self, settings: SettingsRecord):
        """Called by :meth:`configure` with the names of the parameters applied."""
        pass
