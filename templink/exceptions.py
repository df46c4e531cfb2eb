from typing import Optional


class TemplinkError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(TemplinkError):
    # errors related to configuration files.
    pass

class TemplateError(TemplinkError):
    # base for errors raised while composing or rendering templates.
    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name

class TemplateReadError(TemplateError):
    # a template file is missing or unreadable.
    def __init__(self, message: str, name: Optional[str] = None, path: Optional[str] = None):
        super().__init__(message, name=name)
        self.path = path

class TemplateParseError(TemplateError):
    # the handlebars compiler rejected a template body.
    pass

class TemplateRenderError(TemplateError):
    # executing a compiled unit failed.
    pass

class OutputError(TemplinkError):
    # errors during output operations.
    pass
