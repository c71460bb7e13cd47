#!/usr/bin/env python3
"""
pavolume Volume Commands

Keyboard-driven control of PulseAudio sink and application volumes through
pacmd. VolumeCommands holds the entry points a host binds to keys; main()
exposes them as the pavolume command.
"""

import sys
import logging
import argparse
from typing import Callable, Dict, List, Optional

from .backend import AudioBackend, PacmdBackend
from .config_parser import Settings, load_settings
from .errors import AudioControlError
from .host import ConsoleHost, Host
from .listing import AudioNode, NodeState
from .pacmd import PacmdRunner
from .session import InteractiveSession, Keymap

logger = logging.getLogger(__name__)


def format_volume_bar(state: NodeState, width: int = 20) -> str:
    """
    Render a node state as e.g. "Sink 0: [##########----------] 50%"

    Muted nodes get a trailing " [muted]". Volumes above 100% fill the bar.
    """
    filled = min(state.volume, 100) * width // 100
    bar = "#" * filled + "-" * (width - filled)
    text = f"{state.node.label}: [{bar}] {state.volume}%"
    if state.muted:
        text += " [muted]"
    return text


class VolumeCommands:
    """
    Command surface bound to keys by the host.

    Every command that takes a session acts on the session's target while the
    session is active, and on the default sink otherwise.
    """

    def __init__(self, backend: AudioBackend, host: Host, settings: Optional[Settings] = None):
        self.backend = backend
        self.host = host
        self.settings = settings or Settings()

    def new_session(self) -> InteractiveSession:
        return InteractiveSession(self.host, self.backend, self.interactive_keymap())

    def interactive_keymap(self) -> Keymap:
        """Build the key -> handler table from the configured key bindings"""
        actions: Dict[str, Callable] = {
            "increase": self.increase_volume,
            "decrease": self.decrease_volume,
            "toggle-mute": self.toggle_mute,
            "show": self.show_volume,
            "exit": self.exit_interactive,
        }
        keymap = {}
        for key, action in self.settings.keys.items():
            if action not in actions:
                logger.warning(f"Ignoring key '{key}': unknown action '{action}'")
                continue
            keymap[key] = actions[action]
        return keymap

    def _target(self, session: Optional[InteractiveSession]) -> AudioNode:
        if session is not None and session.active:
            return session.target
        return self.backend.resolve_default()

    def _show(self, node: AudioNode, session: Optional[InteractiveSession]) -> NodeState:
        state = self.backend.read_state(node)
        text = format_volume_bar(state, self.settings.bar_width)
        if session is not None and session.active:
            self.host.display_persistent_message(text)
        else:
            self.host.display_message(text)
        return state

    def increase_volume(self, session: Optional[InteractiveSession] = None) -> NodeState:
        node = self._target(session)
        self.backend.step_volume(node, self.settings.step)
        return self._show(node, session)

    def decrease_volume(self, session: Optional[InteractiveSession] = None) -> NodeState:
        node = self._target(session)
        self.backend.step_volume(node, -self.settings.step)
        return self._show(node, session)

    def toggle_mute(self, session: Optional[InteractiveSession] = None) -> NodeState:
        node = self._target(session)
        self.backend.toggle_mute(node)
        return self._show(node, session)

    def show_volume(self, session: Optional[InteractiveSession] = None) -> NodeState:
        return self._show(self._target(session), session)

    def enter_interactive(self, session: InteractiveSession,
                          target: Optional[AudioNode] = None) -> AudioNode:
        """
        Start interactive mode on target (default sink if None) and show its bar.

        Any failure leaves the session idle with the keymap restored.
        """
        node = session.enter(target)
        try:
            self._show(node, session)
        except Exception:
            session.exit()
            raise
        return node

    def exit_interactive(self, session: InteractiveSession) -> bool:
        return session.exit()

    def list_applications(self, session: InteractiveSession) -> Optional[AudioNode]:
        """
        Offer the playing applications in a menu and adjust the chosen one
        interactively.

        Returns:
            The selected sink input, or None if nothing is playing or the menu
            was cancelled
        """
        inputs = self.backend.list_sink_inputs()
        if not inputs:
            self.host.display_message("No applications playing")
            return None
        choice = self.host.select_from_menu([(node.label, node) for node in inputs])
        if choice is None:
            logger.debug("Application menu cancelled")
            return None
        return self.enter_interactive(session, choice)

    def normalize_application_volumes(self) -> int:
        """
        Set every application stream to the configured target volume, so the
        sink volume alone decides loudness.

        Returns:
            Number of sink inputs changed
        """
        target = self.settings.normalize_target
        inputs = self.backend.list_sink_inputs()
        for node in inputs:
            self.backend.set_volume(node, target)
        self.host.display_message(f"Set {len(inputs)} application volume(s) to {target}%")
        return len(inputs)


def _make_host(notify: bool) -> ConsoleHost:
    if notify:
        from .notify import NotificationHost
        return NotificationHost()
    return ConsoleHost()


def _print_nodes(backend: AudioBackend, nodes: List[AudioNode], width: int,
                 default: Optional[AudioNode] = None):
    for node in nodes:
        marker = "*" if node == default else " "
        print(f"{marker} [{node.index}] {format_volume_bar(backend.read_state(node), width)}")


def main(argv=None):
    # Configure logging to send messages to stderr
    logging.basicConfig(level=logging.INFO,
                        format='%(levelname)s: %(message)s',
                        stream=sys.stderr)

    parser = argparse.ArgumentParser(
        description='Control PulseAudio sink and application volumes through pacmd')

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('--up', action='store_true',
                       help='Increase the default sink volume by one step')
    group.add_argument('--down', action='store_true',
                       help='Decrease the default sink volume by one step')
    group.add_argument('--toggle-mute', action='store_true',
                       help='Mute or unmute the default sink')
    group.add_argument('--status', action='store_true',
                       help='Show the default sink volume')
    group.add_argument('--interactive', action='store_true',
                       help='Adjust the default sink with single keys (one per line)')
    group.add_argument('--applications', action='store_true',
                       help='Pick a playing application and adjust it interactively')
    group.add_argument('--normalize', action='store_true',
                       help='Set all application volumes to the normalize target')
    group.add_argument('--list-sinks', action='store_true',
                       help='List sinks with their volume, default marked with *')
    group.add_argument('--list-inputs', action='store_true',
                       help='List playing applications with their volume')

    parser.add_argument('--step', type=int, metavar='PERCENT',
                        help='Volume step in percent (overrides the config file)')
    parser.add_argument('--config', metavar='FILE',
                        help='Path to the JSON configuration file')
    parser.add_argument('--notify', action='store_true',
                        help='Show messages as desktop notifications (needs dbus-python)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    settings = load_settings(args.config)
    if args.step is not None:
        settings.step = args.step

    backend = PacmdBackend(PacmdRunner(settings.command), settings.native_max)

    try:
        if args.list_sinks:
            sinks = backend.list_sinks()
            if not sinks:
                print("No sinks available")
                return 0
            _print_nodes(backend, sinks, settings.bar_width, backend.resolve_default())
            return 0

        if args.list_inputs:
            inputs = backend.list_sink_inputs()
            if not inputs:
                print("No applications playing")
                return 0
            _print_nodes(backend, inputs, settings.bar_width)
            return 0

        host = _make_host(args.notify)
        commands = VolumeCommands(backend, host, settings)

        if args.up:
            commands.increase_volume()
        elif args.down:
            commands.decrease_volume()
        elif args.toggle_mute:
            commands.toggle_mute()
        elif args.status:
            commands.show_volume()
        elif args.normalize:
            commands.normalize_application_volumes()
        elif args.interactive:
            session = commands.new_session()
            commands.enter_interactive(session)
            host.dispatch_loop(session)
        elif args.applications:
            session = commands.new_session()
            if commands.list_applications(session) is not None:
                host.dispatch_loop(session)
    except AudioControlError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
