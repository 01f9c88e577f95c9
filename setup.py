from setuptools import setup

DESCRIPTION = 'Fixed-dimensionality, contiguous N-dimensional arrays ' \
              'with stride-based addressing for Python.'

with open('README.md') as f:
    LONG_DESCRIPTION = f.read()

dependencies = [
    'numpy>=1.22',
    'numcodecs>=0.10',
    'donfig>=0.8',
]

setup(
    name='stridearray',
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    version='0.1.0',
    setup_requires=[
        'setuptools>=38.6.0',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    python_requires='>=3.8, <4',
    install_requires=dependencies,
    package_dir={'': '.'},
    packages=['stridearray', 'stridearray.tests'],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Operating System :: Unix',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
    license='MIT',
)
