CLIENT_ID = "887069703934-test.apps.googleusercontent.com"
ACCESS_TOKEN = "T1"
FOLDER_ID = "F1"
FILE_ID = "X1"
