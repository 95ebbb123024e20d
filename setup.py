from __future__ import annotations

from pathlib import Path

from setuptools import setup


BASE_DIR = Path(__file__).resolve().parent


def read_requirements() -> list[str]:
    req = BASE_DIR / "requirements.txt"
    if not req.exists():
        return []
    lines: list[str] = []
    for line in req.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        lines.append(line)
    return lines


setup(
    name="fitness_club_manager",
    version="1.0.0",
    description="Desktop manager for fitness club members, attendance and premium payments",
    long_description=(BASE_DIR / "README.md").read_text(encoding="utf-8") if (BASE_DIR / "README.md").exists() else "",
    long_description_content_type="text/markdown",
    python_requires=">=3.9",
    # The project is a set of top-level modules, not a package.
    py_modules=[
        "main",
        "config",
        "members",
        "member_files",
        "roster",
        "utils",
        "main_window",
        "members_frame",
    ],
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "fitness_club=main:main",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: MIT License",
    ],
    keywords="gym, fitness, membership, ttkbootstrap, tkinter",
)
