"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='book-of-time',
	version='0.1.0',
	packages=['bookoftime'],
	license='MIT',
	description='Compile formulas in x, y and t into fast numeric functions for animated surface plots',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Compilers",
		"Topic :: Scientific/Engineering :: Mathematics",
		"Topic :: Education",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
		"numpy>=1.21",
	]
)
