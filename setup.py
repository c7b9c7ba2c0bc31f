from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="pruto",
    version="0.1.0",
    author="Pruto Team",
    author_email="dev@pruto.example.com",
    description="A Flask product catalog backend on MongoDB, with a JSON API client",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/pruto/pruto",
    packages=find_packages(include=["pruto", "pruto.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Framework :: Flask",
    ],
    python_requires=">=3.8",
    install_requires=[
        "Flask>=3.0.0",
        "Flask-PyMongo>=2.3.0",
        "pymongo>=4.0",
        "Flask-CORS>=4.0.0",
        "python-dotenv>=1.0.0",
        "requests>=2.28.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-flask>=1.2",
            "mongomock>=4.1",
            "responses>=0.23",
            "black>=22.0",
            "flake8>=5.0",
        ],
    },
    zip_safe=False,
)
