from setuptools import setup

setup(
    name="pumastats",
    version="0.1.0",
    author="mcrespoae",
    author_email="info@mariocrespo.es",
    packages=["pumastats"],
    description="A dead simple background stats logger for multi-process application servers",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/mcrespoae/pumastats",
    install_requires=["psutil>=5.9.8", "multiprocess>=0.70.16"],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.10",
    keywords=["pumastats", "puma", "stats", "metrics"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Intended Audience :: Developers",
    ],
)
