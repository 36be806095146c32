"""FocusLens: bounded, prioritized views over OmniFocus perspectives."""
