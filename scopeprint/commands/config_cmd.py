"""
ConfigCommand -- Display and set configuration
"""

from ..commands.base import BaseCommand

COMMAND_NAME = 'config'


class ConfigCommand(BaseCommand):
    """Command for configuration display and modification."""

    def show(self) -> int:
        print(self.config_manager.display())
        return 0

    def set(self, assignment: str, user: bool = False) -> int:
        """
        Apply a KEY=VALUE assignment.

        Args:
            assignment: e.g. "fingerprint.algorithm=sha512"
            user: Write to the user config instead of the project config
        """
        if '=' not in assignment:
            print("Error: Use format KEY=VALUE (e.g., fingerprint.algorithm=sha512)")
            return 1

        key, value = assignment.split('=', 1)
        error = self.config_manager.set(key.strip(), value.strip(), scope="user" if user else "project")
        if error:
            print(f"Error: {error}")
            return 1

        print(f"Set {key.strip()} = {value.strip()}")
        return 0


def register_parser(subparsers):
    """Register config command parser."""
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., scopes.categories.MagicNumber=method)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    """Handle config command dispatch."""
    command = ConfigCommand(cli)
    if args.set:
        return command.set(args.set, user=args.user)
    return command.show()
