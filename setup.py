import io
import re

from setuptools import find_packages, setup

__version__ = re.search(
    r'__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
    io.open("src/dagsched/version.py", encoding="utf_8_sig").read(),
).group(1)


setup(
    name="dagsched-python",
    version=__version__,
    description="dagsched is a Python library for list scheduling workflow graphs onto identical machines.",
    long_description="""dagsched is a Python library for list scheduling workflow graphs onto identical machines.""",
    author="",
    author_email="",
    package_dir={"": "src"},
    packages=find_packages("src"),
    zip_safe=False,
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "fire",
        "networkx",
        "numpy",
        "pydantic>=2",
        "randomname",
        "sortedcontainers",
    ],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        "console_scripts": ["dagsched=dagsched.__main__:main"],
    },
)
