from setuptools import setup


dependencies = [
    # eviction, duplicate and progress events are blinker signals
    'blinker',
    'cached_property',
]


setup(
    name='chunkstitch',
    version='0.1',
    packages=['chunkstitch'],
    description='Split blobs into fixed-size pieces and stitch them back '
                'together, in any arrival order.',
    license='GPL',
    python_requires='>=3.6',
    install_requires=dependencies,
    extras_require={'test': ['pytest']},
    zip_safe=False)
