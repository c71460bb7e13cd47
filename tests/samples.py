"""
Captured pacmd output used as the reference wire format, plus test doubles
"""
from pavolume.errors import ExternalToolError
from pavolume.host import Host

SINKS = (
    ">>> 2 sink(s) available.\n"
    "    index: 0\n"
    "\tname: <alsa_output.pci-0000_00_03.0.hdmi-stereo>\n"
    "\tdriver: <module-alsa-card.c>\n"
    "\tflags: HARDWARE DECIBEL_VOLUME LATENCY SET_FORMATS\n"
    "\tstate: SUSPENDED\n"
    "\tvolume: front-left: 65536 / 100% / 0.00 dB,   front-right: 65536 / 100% / 0.00 dB\n"
    "\t        balance 0.00\n"
    "\tbase volume: 65536 / 100% / 0.00 dB\n"
    "\tvolume steps: 65537\n"
    "\tmuted: no\n"
    "  * index: 1\n"
    "\tname: <alsa_output.pci-0000_00_1f.3.analog-stereo>\n"
    "\tdriver: <module-alsa-card.c>\n"
    "\tflags: HARDWARE HW_MUTE_CTRL HW_VOLUME_CTRL DECIBEL_VOLUME LATENCY\n"
    "\tstate: RUNNING\n"
    "\tvolume: front-left: 32768 /  50% / -18.06 dB,   front-right: 32768 /  50% / -18.06 dB\n"
    "\t        balance 0.00\n"
    "\tbase volume: 65536 / 100% / 0.00 dB\n"
    "\tvolume steps: 65537\n"
    "\tmuted: yes\n"
    "\tproperties:\n"
    "\t\tdevice.description = \"Built-in Audio Analog Stereo\"\n"
)

SINK_INPUTS = (
    ">>> 2 sink input(s) available.\n"
    "    index: 7\n"
    "\tdriver: <protocol-native.c>\n"
    "\tstate: RUNNING\n"
    "\tsink: 1 <alsa_output.pci-0000_00_1f.3.analog-stereo>\n"
    "\tvolume: 0:  75% 1:  75%\n"
    "\tmuted: no\n"
    "\tproperties:\n"
    "\t\tmedia.name = \"Playback Stream\"\n"
    "\t\tapplication.name = \"Firefox\"\n"
    "    index: 12\n"
    "\tdriver: <protocol-native.c>\n"
    "\tstate: RUNNING\n"
    "\tsink: 1 <alsa_output.pci-0000_00_1f.3.analog-stereo>\n"
    "\tvolume: 0: 19660 /  30% / -31.37 dB,   1: 19660 /  30% / -31.37 dB\n"
    "\tmuted: yes\n"
    "\tproperties:\n"
    "\t\tapplication.name = \"mpv \\\"Music\\\" Player\"\n"
)

NO_SINKS = ">>> 0 sink(s) available.\n"
NO_SINK_INPUTS = ">>> 0 sink input(s) available.\n"


def sink_listing(volume, muted="no", marked=True):
    """Single sink with index 0"""
    marker = "* " if marked else "  "
    raw = 65536 * volume // 100
    return (
        ">>> 1 sink(s) available.\n"
        f"  {marker}index: 0\n"
        "\tname: <alsa_output.usb-headset.analog-stereo>\n"
        f"\tvolume: front-left: {raw} / {volume:3d}% / -9.00 dB,   front-right: {raw} / {volume:3d}% / -9.00 dB\n"
        f"\tmuted: {muted}\n"
    )


class FakeRunner:
    """Stands in for PacmdRunner. Listings are static, every call is recorded."""

    def __init__(self, sinks=SINKS, sink_inputs=SINK_INPUTS, fail_on=()):
        self.listings = {"list-sinks": sinks, "list-sink-inputs": sink_inputs}
        self.fail_on = set(fail_on)
        self.calls = []

    def run(self, *args):
        call = tuple(str(a) for a in args)
        self.calls.append(call)
        if call[0] in self.fail_on:
            raise ExternalToolError(f"pacmd {call[0]} failed")
        return self.listings.get(call[0], "")

    @property
    def mutations(self):
        return [c for c in self.calls if c[0].startswith("set-")]


class FakeHost(Host):
    """Records everything shown to the user. menu_choice is an item position."""

    def __init__(self, menu_choice=None):
        self.messages = []
        self.persistent = []
        self.keymaps = []
        self.restored = 0
        self.menu_items = None
        self.menu_choice = menu_choice

    def display_message(self, text):
        self.messages.append(text)

    def display_persistent_message(self, text):
        self.persistent.append(text)

    def install_keymap(self, keymap):
        self.keymaps.append(keymap)

    def restore_keymap(self):
        self.keymaps.pop()
        self.restored += 1

    def select_from_menu(self, items):
        self.menu_items = list(items)
        if self.menu_choice is None:
            return None
        return self.menu_items[self.menu_choice][1]
