from setuptools import setup


setup(
    name='clac',
    use_scm_version={'fallback_version': '0.1.0'},
    description='RPN calculator with undo/redo',
    install_requires=[
        'regex',
        'prompt_toolkit',
    ],
    packages=['clac'],
    package_dir={'': 'src'},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
    python_requires='>=3.8',
    setup_requires=[
        'setuptools_scm',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
            'hypothesis',
            'flake8',
        ],
    },
    entry_points={
        'console_scripts': [
            'clac = clac.cli:main',
        ],
    },
    license='ISC',
)
