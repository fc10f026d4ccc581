import setuptools

setuptools.setup(
    name='optschema',
    version='1.0.0',
    license='MIT',
    zip_safe=False,
    packages=setuptools.find_packages(include=['optschema', 'optschema.*']),
    fullname='optschema',
    python_requires='>=3.9',
    install_requires=[
        'pyyaml', 'rich', 'rapidfuzz',
        'tree-sitter>=0.23', 'tree-sitter-typescript>=0.23'
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['optschema=optschema.main:main'],
    },
    description='Derives command-line option schemas and yargs command modules from documented TypeScript declarations.',
)
