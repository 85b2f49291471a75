"""Reference solutions in Python for basics, errors, quizzes, standard types, containers and models."""