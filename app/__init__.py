"""
Entry points — console report (cli.py) and Streamlit dashboard (streamlit_app.py).
"""
