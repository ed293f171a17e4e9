# phrase_markov/utils - logging, thread pool, settings and file persistence helpers
