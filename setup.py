from setuptools import setup
import os

# Read version from version module
def get_version():
    version_file = os.path.join(os.path.dirname(__file__), 'pavolume', '_version.py')
    with open(version_file, 'r') as f:
        for line in f:
            if line.startswith('__version__'):
                return line.split('=')[1].strip().strip('"\'')
    raise RuntimeError('Unable to find version string.')

# Read requirements from requirements.txt
with open(os.path.join(os.path.dirname(__file__), "requirements.txt")) as f:
    requirements = [line.strip() for line in f.readlines() if line.strip() and not line.startswith("#")]

setup(
    name="pavolume",
    version=get_version(),
    description="Keyboard-driven PulseAudio volume control through pacmd",
    long_description="Keyboard-driven PulseAudio volume control through pacmd",
    license="MIT",
    packages=["pavolume"],
    install_requires=requirements,
    extras_require={
        "notify": ["dbus-python"],
        "test": ["pytest", "dbus-python"],
    },
    entry_points={
        "console_scripts": [
            "pavolume=pavolume.volume:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.8",
)
