from setuptools import setup, find_packages


setup(
    name="quatrot",
    version="1.0.0",
    description="Single precision unit quaternion rotations for 3D graphics",
    packages=find_packages(include=["quatrot", "quatrot.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.24",
        "pandas>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
)
