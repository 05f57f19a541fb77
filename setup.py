from setuptools import setup

setup(
    name="geomsg",
    version="0.1.0",
    description="A GeoJSON value model with fast JSON encoding and decoding, built on msgspec",
    license="BSD",
    packages=["geomsg"],
    package_data={"geomsg": ["py.typed"]},
    python_requires=">=3.8",
    install_requires=["msgspec>=0.18"],
    extras_require={
        "yaml": ["pyyaml"],
        "test": ["pytest", "pyyaml"],
    },
)
