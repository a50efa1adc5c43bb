"""
Sub-package Documentation
==========================

The engine computes the ribosome decision graph model for a single RNA sequence. All functions are
stateless: they take explicit inputs (sequence, readthrough annotations, model parameters) and return
newly constructed results.

Types of Output Files
------------------------

+--------------------------------+------------------+------------------------------------------+
| expected name/suffix           | file type/format | content                                  |
+================================+==================+==========================================+
| ``translons.tab``              | text/tabbed      | ranked translation events                |
+--------------------------------+------------------+------------------------------------------+
| ``start_codons.tab``           | text/tabbed      | all start codons with their probability  |
+--------------------------------+------------------+------------------------------------------+
| ``features.json``              | JSON             | canonical and predicted features         |
+--------------------------------+------------------+------------------------------------------+
"""
