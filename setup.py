from setuptools import find_packages, setup

with open("README.md", encoding="utf-8") as fh:
    long_description = fh.read()
with open("doxpost/semver.txt", encoding="utf-8") as fh:
    semver = fh.read().strip()
with open("requirements.txt", encoding="utf-8") as fh:
    install_requires = [x.strip() for x in fh.read().strip().split("\n") if len(x) and x[0].isalpha()]

setup(
    name="doxpost",
    version=semver,
    description="Post-processes dox-generated API docs: moves events into their own sections and tidies availability notes.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["doxpost", "doxpost.*"]),
    package_data={"doxpost": ["semver.txt"]},
    include_package_data=True,
    install_requires=install_requires,
    extras_require={"test": ["pytest"]},
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3.9",
        "Topic :: Software Development :: Documentation",
    ],
    entry_points={"console_scripts": ["doxpost = doxpost:main"]},
)
