from setuptools import setup, find_packages

setup(
    name="klondike-autoplay",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["klondike_core", "autoplay"],
    install_requires=[
        "numpy>=1.21.0",
        "tqdm>=4.64.0",
        "colored>=1.4.3",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "klondike-autoplay=autoplay:main",
        ],
    },
    python_requires=">=3.8",
    zip_safe=False,
    include_package_data=True,
    author="Klondike AI Team",
    author_email="contact@klondike-ai.org",
    description="Greedy Klondike Solitaire autoplayer that peeks at the stock pile",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Games/Entertainment :: Board Games",
    ],
)
