"""
Templates for rendering store objects.

Templates are Jinja2 templates. Partials are registered by name and pulled
into a template with ``{% include 'name' %}``.
"""

import jinja2


class TemplateRegistry(object):
    """Compiles templates and keeps the partials they can include."""

    def __init__(self, partials=None):
        self.partials = {}
        self.environment = jinja2.Environment(
            loader=jinja2.DictLoader(self.partials),
            autoescape=jinja2.select_autoescape(
                enabled_extensions=('html', 'htm', 'xml'),
                default_for_string=True, default=True),
            undefined=jinja2.ChainableUndefined)
        for name, source in (partials or {}).items():
            self.register_partial(name, source)

    def register_partial(self, name, source):
        # DictLoader reloads a cached partial once its source changes
        self.partials[name] = source

    def compile(self, source):
        """
        Compiles a template.

        :param source: the template source.

        :return: a function rendering the template with a data dict.
        """
        template = self.environment.from_string(source)

        def render(data=None):
            return template.render(**(data or {}))

        render.source = source
        return render
