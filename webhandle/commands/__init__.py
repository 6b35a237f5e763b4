from webhandle.commands.dom_commands import DomCommands
from webhandle.commands.domain_commands import DomainCommands
from webhandle.commands.input_commands import InputCommands
from webhandle.commands.page_commands import PageCommands
from webhandle.commands.runtime_commands import RuntimeCommands

__all__ = ['DomCommands', 'DomainCommands', 'InputCommands', 'PageCommands', 'RuntimeCommands']
